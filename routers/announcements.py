from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database.db import get_db
from dependencies.security import require_admin, require_any_role
from models.announcements import Announcement as AnnouncementModel
from schemas.announcements import Announcement, AnnouncementCreate
from services.crud import commit_or_raise, get_or_404

router = APIRouter(prefix="/announcements", tags=["공지사항"])


# ==========================================================
# [1단계] CRUD 기본 라우터
# ==========================================================

# ✅ [CREATE] 공지사항 추가
# - 이미지 업로드는 외부 저장소에서 처리하고 경로(image_url)만 받는다
@router.post("/", dependencies=[Depends(require_admin)])
def create_announcement(announcement: AnnouncementCreate, db: Session = Depends(get_db)):
    db_announcement = AnnouncementModel(**announcement.model_dump())
    db.add(db_announcement)
    commit_or_raise(db, "이미 등록된 공지사항입니다")
    db.refresh(db_announcement)
    return {
        "success": True,
        "data": Announcement.model_validate(db_announcement).model_dump(mode="json"),
        "message": "공지사항이 성공적으로 등록되었습니다"
    }


# ✅ [READ] 전체 공지사항 조회 (최신순, 학부모/교사도 조회 가능)
@router.get("/", dependencies=[Depends(require_any_role)])
def read_announcements(db: Session = Depends(get_db)):
    records = (
        db.query(AnnouncementModel)
        .order_by(AnnouncementModel.created_at.desc(), AnnouncementModel.id.desc())
        .all()
    )
    return {
        "success": True,
        "data": [Announcement.model_validate(r).model_dump(mode="json") for r in records],
        "message": "전체 공지사항 조회 완료"
    }


# ✅ [DELETE] 공지사항 삭제
@router.delete("/{announcement_id}", dependencies=[Depends(require_admin)])
def delete_announcement(announcement_id: int, db: Session = Depends(get_db)):
    announcement = get_or_404(db, AnnouncementModel, announcement_id, "공지사항")
    db.delete(announcement)
    commit_or_raise(db, "공지사항을 삭제할 수 없습니다")
    return {
        "success": True,
        "data": {"announcement_id": announcement_id},
        "message": "공지사항이 성공적으로 삭제되었습니다"
    }
