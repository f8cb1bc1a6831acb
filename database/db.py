from sqlalchemy import create_engine, event         # SQLAlchemy 엔진 생성 도구
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base        # 모델의 Base 클래스
from sqlalchemy.orm import sessionmaker            # 세션 팩토리 함수

from config.settings import settings               # ✅ 환경변수 설정 파일 불러오기

# ✅ 환경변수에서 DB 연결 URL을 불러와 엔진 생성
engine = create_engine(settings.DATABASE_URL, echo=settings.DB_ECHO, pool_pre_ping=True)

# ✅ 세션 팩토리: DB 연결에 사용할 세션 생성기 정의
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# ✅ 모델 정의 시 상속할 Base 클래스 (Declarative 방식 사용)
Base = declarative_base()


# ✅ SQLite는 기본적으로 FK를 검사하지 않으므로 연결마다 켜준다
@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    if dbapi_connection.__class__.__module__.startswith("sqlite3"):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


# ==========================================================
# [공통] DB 세션 관리
# - 모든 요청에서 DB 연결을 생성하고 종료
# ==========================================================
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind=None):
    """모든 모델 테이블 생성 (없을 때만)"""
    # 모델 모듈을 import 해야 Base.metadata에 테이블이 등록된다
    from models import (  # noqa: F401
        announcements, class_subjects, classes, enrollments, grades,
        school_settings, students, subjects, teachers,
    )

    Base.metadata.create_all(bind=bind or engine)
