from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from database.db import get_db
from dependencies.security import require_staff
from schemas.grades import GradeSubmission
from services.errors import NotFoundError
from services.grade_manager import GradeRecordManager
from services.grade_store import GradeStore
from services.report_service import build_grade_sheet
from services.school_settings_service import allowed_terms, get_settings

router = APIRouter(prefix="/grades", tags=["grades"], dependencies=[Depends(require_staff)])


# ==========================================================
# [공통] 성적 매니저 생성
# - 허용 기간(term)은 학교 설정의 평가 주기에서 가져온다
# ==========================================================
def get_grade_manager(db: Session = Depends(get_db)) -> GradeRecordManager:
    periodicity = get_settings(db).periodicity
    return GradeRecordManager(GradeStore(db), allowed_terms=allowed_terms(periodicity))


# ==========================================================
# [1단계] 성적 입력 (upsert)
# ==========================================================

# ✅ [UPSERT] 성적 입력/수정
# - 같은 (학생, 과목, 학급, 기간)으로 다시 보내면 기존 행을 수정 (중복 행 없음)
# - 호출 후 성적표/대시보드 화면은 새로 조회해야 한다
@router.put("/")
def submit_grade(submission: GradeSubmission, manager: GradeRecordManager = Depends(get_grade_manager)):
    grade = manager.submit_grade(submission)
    return {
        "success": True,
        "data": grade.model_dump(mode="json"),
        "message": "Grade saved successfully"
    }


# ==========================================================
# [2단계] 조회
# ==========================================================

# ✅ [READ] 키 단위 성적 조회
@router.get("/lookup")
def lookup_grade(
    student_id: int,
    class_id: int,
    subject_id: int,
    term: int,
    manager: GradeRecordManager = Depends(get_grade_manager),
):
    grade = manager.get_grade(student_id, class_id, subject_id, term)
    if grade is None:
        raise NotFoundError("Grade not found")
    return {"success": True, "data": grade.model_dump(mode="json")}


# ✅ [SHEET] 성적 입력표: 학급 명단 + 과목/기간별 성적
@router.get("/sheet")
def read_grade_sheet(
    class_id: int,
    subject_id: int,
    term: int = Query(1, ge=1),
    db: Session = Depends(get_db),
):
    sheet = build_grade_sheet(db, class_id, subject_id, term)
    return {"success": True, "data": sheet.model_dump(mode="json")}
