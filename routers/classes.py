from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database.db import get_db
from dependencies.security import require_admin
from models.class_subjects import ClassSubject as ClassSubjectModel
from models.classes import Class as ClassModel
from models.subjects import Subject as SubjectModel
from models.teachers import Teacher as TeacherModel
from schemas.classes import Class, ClassCreate, ClassSubject, ClassSubjectCreate
from services.crud import commit_or_raise, get_or_404
from services.errors import ConflictError, NotFoundError

router = APIRouter(prefix="/classes", tags=["classes"], dependencies=[Depends(require_admin)])

# ==========================================================
# [1단계] CRUD 기본 라우터
# ==========================================================

# ✅ [CREATE] 학급 추가
# - 예: 2025년 6학년 A반(오전)을 새로 등록
@router.post("/")
def create_class(new_class: ClassCreate, db: Session = Depends(get_db)):
    db_class = ClassModel(**new_class.model_dump())
    db.add(db_class)
    commit_or_raise(db, "이미 등록된 학급입니다")
    db.refresh(db_class)
    return {
        "success": True,
        "data": Class.model_validate(db_class).model_dump(),
        "message": "Class created successfully"
    }

# ✅ [READ] 전체 학급 조회 (이름순)
@router.get("/")
def read_classes(db: Session = Depends(get_db)):
    records = db.query(ClassModel).order_by(ClassModel.name).all()
    return {
        "success": True,
        "data": [Class.model_validate(r).model_dump() for r in records]
    }

# ==========================================================
# [2단계] 학급 편성 과목
# ==========================================================

# ✅ [READ] 학급에 편성된 과목 목록
@router.get("/{class_id}/subjects")
def read_class_subjects(class_id: int, db: Session = Depends(get_db)):
    get_or_404(db, ClassModel, class_id, "학급")
    records = (
        db.query(ClassSubjectModel)
        .join(SubjectModel, SubjectModel.id == ClassSubjectModel.subject_id)
        .filter(ClassSubjectModel.class_id == class_id)
        .order_by(SubjectModel.name)
        .all()
    )
    return {
        "success": True,
        "data": [
            {**ClassSubject.model_validate(r).model_dump(), "subject_name": r.subject.name}
            for r in records
        ]
    }

# ✅ [CREATE] 학급에 과목 편성 (같은 과목 중복 편성 불가)
@router.post("/{class_id}/subjects")
def add_subject_to_class(class_id: int, payload: ClassSubjectCreate, db: Session = Depends(get_db)):
    get_or_404(db, ClassModel, class_id, "학급")
    get_or_404(db, SubjectModel, payload.subject_id, "과목")
    if payload.teacher_id is not None:
        get_or_404(db, TeacherModel, payload.teacher_id, "교사")

    exists = (
        db.query(ClassSubjectModel)
        .filter(ClassSubjectModel.class_id == class_id, ClassSubjectModel.subject_id == payload.subject_id)
        .first()
    )
    if exists:
        raise ConflictError("이 과목은 이미 해당 학급에 편성되어 있습니다")

    link = ClassSubjectModel(class_id=class_id, subject_id=payload.subject_id, teacher_id=payload.teacher_id)
    db.add(link)
    # 동시 요청으로 유니크 제약에 걸리면 ConflictError
    commit_or_raise(db, "이 과목은 이미 해당 학급에 편성되어 있습니다")
    db.refresh(link)
    return {
        "success": True,
        "data": ClassSubject.model_validate(link).model_dump(),
        "message": "과목이 학급에 편성되었습니다"
    }

# ✅ [DELETE] 학급 편성 과목 해제
@router.delete("/{class_id}/subjects/{class_subject_id}")
def remove_subject_from_class(class_id: int, class_subject_id: int, db: Session = Depends(get_db)):
    link = (
        db.query(ClassSubjectModel)
        .filter(ClassSubjectModel.id == class_subject_id, ClassSubjectModel.class_id == class_id)
        .first()
    )
    if link is None:
        raise NotFoundError("편성 과목을 찾을 수 없습니다")
    db.delete(link)
    commit_or_raise(db, "편성 과목을 해제할 수 없습니다")
    return {"success": True, "data": {"class_subject_id": class_subject_id}}

# ==========================================================
# [3단계] 완전 동적 라우터
# ==========================================================

# ✅ [READ] 특정 학급 조회
@router.get("/{class_id}")
def read_class(class_id: int, db: Session = Depends(get_db)):
    school_class = get_or_404(db, ClassModel, class_id, "학급")
    return {"success": True, "data": Class.model_validate(school_class).model_dump()}

# ✅ [UPDATE] 학급 정보 수정
@router.put("/{class_id}")
def update_class(class_id: int, updated: ClassCreate, db: Session = Depends(get_db)):
    school_class = get_or_404(db, ClassModel, class_id, "학급")
    for key, value in updated.model_dump().items():
        setattr(school_class, key, value)
    commit_or_raise(db, "이미 등록된 학급입니다")
    db.refresh(school_class)
    return {
        "success": True,
        "data": Class.model_validate(school_class).model_dump(),
        "message": "Class updated successfully"
    }

# ✅ [DELETE] 학급 삭제
# - 학생 배정과 성적은 FK CASCADE로 함께 삭제된다
@router.delete("/{class_id}")
def delete_class(class_id: int, db: Session = Depends(get_db)):
    school_class = get_or_404(db, ClassModel, class_id, "학급")
    db.delete(school_class)
    commit_or_raise(db, "학급을 삭제할 수 없습니다")
    return {
        "success": True,
        "data": {"class_id": class_id, "message": "Class deleted successfully"}
    }
