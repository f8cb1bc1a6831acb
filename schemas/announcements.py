from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional


# ==========================================================
# [입력용 스키마]
# ==========================================================
class AnnouncementCreate(BaseModel):
    title: str = Field(..., min_length=3)            # 제목
    content: str = Field(..., min_length=5)          # 내용
    image_url: Optional[str] = None                  # 이미지 경로 (업로드는 외부에서 처리)


# ==========================================================
# [출력용 스키마]
# ==========================================================
class Announcement(AnnouncementCreate):
    id: int                                          # 공지 고유 ID
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
