from sqlalchemy import Column, Integer, String, Text, DateTime, func
from database.db import Base

class Announcement(Base):
    __tablename__ = "announcements"  # 공지사항 테이블

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)  # 공지 고유 ID
    title = Column(String(150), nullable=False)                             # 공지 제목
    content = Column(Text, nullable=False)                                  # 공지 내용
    image_url = Column(String(300))                                         # 첨부 이미지 경로 (선택)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)
