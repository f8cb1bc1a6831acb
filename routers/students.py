from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database.db import get_db
from dependencies.security import require_admin
from models.classes import Class as ClassModel
from models.enrollments import Enrollment as EnrollmentModel
from models.students import Student as StudentModel
from schemas.students import Student, StudentCreate
from services.crud import commit_or_raise, get_or_404

router = APIRouter(prefix="/students", tags=["학생 정보"], dependencies=[Depends(require_admin)])


def _current_class_id(db: Session, student_id: int) -> Optional[int]:
    enrollment = db.query(EnrollmentModel).filter(EnrollmentModel.student_id == student_id).first()
    return enrollment.class_id if enrollment else None


def _to_schema(student: StudentModel, class_id: Optional[int]) -> dict:
    data = Student.model_validate(student).model_dump(mode="json")
    data["class_id"] = class_id
    return data


def _enroll(db: Session, student_id: int, class_id: Optional[int]):
    # 학생은 한 번에 하나의 학급에만 배정된다
    db.query(EnrollmentModel).filter(EnrollmentModel.student_id == student_id).delete()
    if class_id is not None:
        get_or_404(db, ClassModel, class_id, "학급")
        db.add(EnrollmentModel(student_id=student_id, class_id=class_id))


# ==========================================================
# [1단계] CRUD 기본 라우터
# ==========================================================

# ✅ [CREATE] 학생 정보 추가 (class_id가 있으면 해당 학급에 배정)
@router.post("/")
def create_student(student: StudentCreate, db: Session = Depends(get_db)):
    fields = student.model_dump(exclude={"class_id"})
    db_student = StudentModel(**fields)
    db.add(db_student)
    db.flush()
    _enroll(db, db_student.id, student.class_id)
    commit_or_raise(db, "이미 등록된 학생입니다")
    db.refresh(db_student)
    return {
        "success": True,
        "data": _to_schema(db_student, student.class_id),
        "message": "학생 정보가 성공적으로 추가되었습니다"
    }


# ✅ [READ] 전체 학생 조회 (class_id로 학급 필터)
@router.get("/")
def read_students(class_id: Optional[int] = None, db: Session = Depends(get_db)):
    query = (
        db.query(StudentModel, EnrollmentModel.class_id)
        .outerjoin(EnrollmentModel, EnrollmentModel.student_id == StudentModel.id)
    )
    if class_id is not None:
        query = query.filter(EnrollmentModel.class_id == class_id)
    records = query.order_by(StudentModel.name).all()
    return {
        "success": True,
        "data": [_to_schema(s, cid) for s, cid in records],
        "message": "전체 학생 정보 조회 완료"
    }


# ==========================================================
# [2단계] 완전 동적 라우터 (개별 조회/수정/삭제)
# ==========================================================

# ✅ [READ] 특정 학생 상세 조회
@router.get("/{student_id}")
def read_student(student_id: int, db: Session = Depends(get_db)):
    student = get_or_404(db, StudentModel, student_id, "학생")
    return {
        "success": True,
        "data": _to_schema(student, _current_class_id(db, student_id)),
        "message": "학생 상세 정보 조회 성공"
    }


# ✅ [UPDATE] 특정 학생 정보 수정 (학급 변경 포함)
@router.put("/{student_id}")
def update_student(student_id: int, updated: StudentCreate, db: Session = Depends(get_db)):
    student = get_or_404(db, StudentModel, student_id, "학생")

    for key, value in updated.model_dump(exclude={"class_id"}).items():
        setattr(student, key, value)
    _enroll(db, student_id, updated.class_id)

    commit_or_raise(db, "이미 등록된 학생입니다")
    db.refresh(student)
    return {
        "success": True,
        "data": _to_schema(student, updated.class_id),
        "message": "학생 정보가 성공적으로 수정되었습니다"
    }


# ✅ [DELETE] 특정 학생 삭제 (배정/성적은 FK CASCADE로 함께 삭제)
@router.delete("/{student_id}")
def delete_student(student_id: int, db: Session = Depends(get_db)):
    student = get_or_404(db, StudentModel, student_id, "학생")
    db.delete(student)
    commit_or_raise(db, "학생을 삭제할 수 없습니다")
    return {
        "success": True,
        "data": {"student_id": student_id},
        "message": "학생 정보가 성공적으로 삭제되었습니다"
    }
