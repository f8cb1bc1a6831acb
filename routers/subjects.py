from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database.db import get_db
from dependencies.security import require_admin
from models.grades import Grade as GradeModel
from models.subjects import Subject as SubjectModel
from schemas.subjects import Subject, SubjectCreate
from services.crud import commit_or_raise, get_or_404
from services.errors import ConflictError

router = APIRouter(prefix="/subjects", tags=["과목 정보"], dependencies=[Depends(require_admin)])


# ✅ [CREATE] 과목 정보 추가
@router.post("/")
def create_subject(subject: SubjectCreate, db: Session = Depends(get_db)):
    db_subject = SubjectModel(**subject.model_dump())
    db.add(db_subject)
    commit_or_raise(db, "이미 등록된 과목입니다")
    db.refresh(db_subject)
    return {
        "success": True,
        "data": Subject.model_validate(db_subject).model_dump(),
        "message": "과목 정보가 성공적으로 추가되었습니다"
    }


# ✅ [READ] 전체 과목 조회 (이름순)
@router.get("/")
def read_subjects(db: Session = Depends(get_db)):
    records = db.query(SubjectModel).order_by(SubjectModel.name).all()
    return {
        "success": True,
        "data": [Subject.model_validate(r).model_dump() for r in records],
        "message": "전체 과목 조회 완료"
    }


# ✅ [READ] 특정 과목 조회
@router.get("/{subject_id}")
def read_subject(subject_id: int, db: Session = Depends(get_db)):
    subject = get_or_404(db, SubjectModel, subject_id, "과목")
    return {"success": True, "data": Subject.model_validate(subject).model_dump()}


# ✅ [UPDATE] 과목 정보 수정
@router.put("/{subject_id}")
def update_subject(subject_id: int, updated: SubjectCreate, db: Session = Depends(get_db)):
    subject = get_or_404(db, SubjectModel, subject_id, "과목")
    for key, value in updated.model_dump().items():
        setattr(subject, key, value)
    commit_or_raise(db, "이미 등록된 과목입니다")
    db.refresh(subject)
    return {
        "success": True,
        "data": Subject.model_validate(subject).model_dump(),
        "message": "과목 정보가 성공적으로 수정되었습니다"
    }


# ✅ [DELETE] 과목 삭제
# - 학급 편성/교사 담당 연결은 FK CASCADE, 성적이 남아 있으면 삭제 불가
@router.delete("/{subject_id}")
def delete_subject(subject_id: int, db: Session = Depends(get_db)):
    subject = get_or_404(db, SubjectModel, subject_id, "과목")
    if db.query(GradeModel).filter(GradeModel.subject_id == subject_id).first() is not None:
        raise ConflictError("성적이 등록된 과목은 삭제할 수 없습니다")
    db.delete(subject)
    commit_or_raise(db, "과목을 삭제할 수 없습니다")
    return {
        "success": True,
        "data": {"subject_id": subject_id},
        "message": "과목 정보가 성공적으로 삭제되었습니다"
    }
