from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database.db import get_db
from dependencies.security import require_admin, require_any_role
from services.report_service import build_report_card, dashboard_summary

router = APIRouter(prefix="/reports", tags=["보고서"])


# ✅ [REPORT CARD] 학생 성적표 (과목별 1~4기간 점수, 평균, 통과 여부)
@router.get("/report-card", dependencies=[Depends(require_any_role)])
def read_report_card(class_id: int, student_id: int, db: Session = Depends(get_db)):
    card = build_report_card(db, class_id, student_id)
    return {
        "success": True,
        "data": card.model_dump(mode="json"),
        "message": f"학생 ID {student_id} 성적표 조회 성공"
    }


# ✅ [DASHBOARD] 관리자 홈 요약 (전체 인원 수 + 최근 성적 5건)
@router.get("/dashboard", dependencies=[Depends(require_admin)])
def read_dashboard(db: Session = Depends(get_db)):
    summary = dashboard_summary(db)
    return {"success": True, "data": summary.model_dump(mode="json")}
