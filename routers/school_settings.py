from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database.db import get_db
from dependencies.security import require_admin, require_any_role
from schemas.school_settings import SchoolSettingsUpdate
from services.school_settings_service import allowed_terms, get_settings, upsert_settings

router = APIRouter(prefix="/settings", tags=["설정"])


# ✅ [READ] 학교 설정 조회 (저장 전이면 기본값)
@router.get("/", dependencies=[Depends(require_any_role)])
def read_settings(db: Session = Depends(get_db)):
    current = get_settings(db)
    return {
        "success": True,
        "data": {
            **current.model_dump(mode="json"),
            "terms": sorted(allowed_terms(current.periodicity)),
        },
    }


# ✅ [UPSERT] 학교 설정 저장 (첫 저장이면 생성, 이후 수정)
@router.put("/", dependencies=[Depends(require_admin)])
def update_settings(payload: SchoolSettingsUpdate, db: Session = Depends(get_db)):
    saved = upsert_settings(db, payload)
    return {
        "success": True,
        "data": saved.model_dump(mode="json"),
        "message": "학교 설정이 저장되었습니다"
    }
