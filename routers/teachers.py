from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database.db import get_db
from dependencies.security import require_admin
from models.classes import Class as ClassModel
from models.subjects import Subject as SubjectModel
from models.teachers import Teacher as TeacherModel
from schemas.teachers import Teacher, TeacherCreate
from services.crud import commit_or_raise, get_or_404
from services.errors import NotFoundError

router = APIRouter(prefix="/teachers", tags=["교사 정보"], dependencies=[Depends(require_admin)])


def _load_all(db: Session, model, ids: List[int], label: str):
    """ID 목록을 모두 조회. 하나라도 없으면 NotFoundError"""
    unique_ids = set(ids)
    if not unique_ids:
        return []
    records = db.query(model).filter(model.id.in_(unique_ids)).all()
    missing = unique_ids - {r.id for r in records}
    if missing:
        raise NotFoundError(f"{label} 정보를 찾을 수 없습니다 (id={sorted(missing)})")
    return records


def _to_schema(teacher: TeacherModel) -> dict:
    return Teacher(
        id=teacher.id,
        name=teacher.name,
        email=teacher.email,
        subject_ids=[s.id for s in teacher.subjects],
        class_ids=[c.id for c in teacher.classes],
    ).model_dump()


def _apply(db: Session, teacher: TeacherModel, payload: TeacherCreate):
    teacher.name = payload.name
    teacher.email = payload.email
    teacher.subjects = _load_all(db, SubjectModel, payload.subject_ids, "과목")
    teacher.classes = _load_all(db, ClassModel, payload.class_ids, "학급")


# ==========================================================
# [1단계] CRUD 기본 라우터
# ==========================================================

# ✅ [CREATE] 교사 추가 (담당 과목/학급 연결)
@router.post("/")
def create_teacher(teacher: TeacherCreate, db: Session = Depends(get_db)):
    db_teacher = TeacherModel()
    _apply(db, db_teacher, teacher)
    db.add(db_teacher)
    commit_or_raise(db, "이미 사용 중인 이메일입니다")
    db.refresh(db_teacher)
    return {
        "success": True,
        "data": _to_schema(db_teacher),
        "message": "교사 정보가 성공적으로 추가되었습니다"
    }


# ✅ [READ] 전체 교사 조회
@router.get("/")
def read_teachers(db: Session = Depends(get_db)):
    records = db.query(TeacherModel).order_by(TeacherModel.name).all()
    return {
        "success": True,
        "data": [_to_schema(t) for t in records],
        "message": "전체 교사 정보 조회 완료"
    }


# ==========================================================
# [2단계] 완전 동적 라우터
# ==========================================================

# ✅ [READ] 특정 교사 조회
@router.get("/{teacher_id}")
def read_teacher(teacher_id: int, db: Session = Depends(get_db)):
    teacher = get_or_404(db, TeacherModel, teacher_id, "교사")
    return {"success": True, "data": _to_schema(teacher)}


# ✅ [UPDATE] 교사 정보 수정
@router.put("/{teacher_id}")
def update_teacher(teacher_id: int, updated: TeacherCreate, db: Session = Depends(get_db)):
    teacher = get_or_404(db, TeacherModel, teacher_id, "교사")
    _apply(db, teacher, updated)
    commit_or_raise(db, "이미 사용 중인 이메일입니다")
    db.refresh(teacher)
    return {
        "success": True,
        "data": _to_schema(teacher),
        "message": "교사 정보가 성공적으로 수정되었습니다"
    }


# ✅ [DELETE] 교사 삭제
@router.delete("/{teacher_id}")
def delete_teacher(teacher_id: int, db: Session = Depends(get_db)):
    teacher = get_or_404(db, TeacherModel, teacher_id, "교사")
    db.delete(teacher)
    commit_or_raise(db, "교사를 삭제할 수 없습니다")
    return {
        "success": True,
        "data": {"teacher_id": teacher_id},
        "message": "교사 정보가 성공적으로 삭제되었습니다"
    }
