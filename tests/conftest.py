# tests/conftest.py
"""
공용 테스트 픽스처.
- 테스트마다 메모리 SQLite(StaticPool, FK ON)에 스키마를 새로 만든다
- FastAPI get_db 의존성을 테스트 세션으로 교체한다
"""

import os

# 앱/엔진 import 전에 MySQL 대신 SQLite를 쓰도록 지정
os.environ.setdefault("DB_URL_OVERRIDE", "sqlite://")

from datetime import date
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from database.db import Base, get_db, init_db
from main import app
from models.classes import Class as ClassModel
from models.enrollments import Enrollment as EnrollmentModel
from models.students import Student as StudentModel
from models.subjects import Subject as SubjectModel


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    def _override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def seed(db):
    """학급 1개, 과목 2개(MAT/POR), 학급에 배정된 학생 2명"""
    school_class = ClassModel(name="6A", grade="6º Ano", year=2025, shift="MORNING", segment="FUNDAMENTAL_II")
    math = SubjectModel(name="Matemática", code="MAT")
    portuguese = SubjectModel(name="Português", code="POR")
    ana = StudentModel(name="Ana Souza", birth_date=date(2013, 3, 2), guardian_name="João Souza")
    bruno = StudentModel(name="Bruno Lima", birth_date=date(2013, 7, 19), guardian_name="Carla Lima")
    db.add_all([school_class, math, portuguese, ana, bruno])
    db.flush()
    db.add_all([
        EnrollmentModel(student_id=ana.id, class_id=school_class.id),
        EnrollmentModel(student_id=bruno.id, class_id=school_class.id),
    ])
    db.commit()
    return SimpleNamespace(
        class_id=school_class.id,
        math_id=math.id,
        portuguese_id=portuguese.id,
        ana_id=ana.id,
        bruno_id=bruno.id,
    )
