from sqlalchemy import Column, Integer, String
from database.db import Base

# 수업 시간대 / 학교 단계
SHIFTS = ("MORNING", "AFTERNOON", "EVENING", "FULLTIME")
SEGMENTS = ("INFANTIL", "FUNDAMENTAL_I", "FUNDAMENTAL_II", "MEDIO")


class Class(Base):
    __tablename__ = "classes"

    id = Column(Integer, primary_key=True, index=True)      # 학급 고유 ID (PK)
    name = Column(String(100), nullable=False)              # 학급 이름 (예: 6A)
    grade = Column(String(50), nullable=False)              # 학년 표기 (예: 6º Ano)
    year = Column(Integer, nullable=False)                  # 학년도 (예: 2025)
    shift = Column(String(20), nullable=False)              # 시간대 (SHIFTS 중 하나)
    segment = Column(String(20), nullable=False)            # 학교 단계 (SEGMENTS 중 하나)
