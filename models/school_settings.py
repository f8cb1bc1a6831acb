from sqlalchemy import Column, Integer, String, Float, Boolean
from database.db import Base

# 평가 주기 → 학년도 내 기간 수
PERIODICITY_TERMS = {
    "BIMESTRAL": 4,
    "TRIMESTRAL": 3,
    "SEMESTRAL": 2,
}


class SchoolSettings(Base):
    __tablename__ = "school_settings"  # 학교 전역 설정 (단일 행)

    id = Column(Integer, primary_key=True, index=True)
    # 프로필
    school_name = Column(String(150), nullable=False)
    school_logo = Column(String(300))
    cnpj = Column(String(30))
    address = Column(String(200))
    phone = Column(String(30))
    # 학사
    current_year = Column(String(10), nullable=False)
    passing_grade = Column(Float, nullable=False, default=7.0)      # 통과 기준 점수
    periodicity = Column(String(20), nullable=False, default="BIMESTRAL")
    min_frequency = Column(Float, nullable=False, default=75.0)     # 최소 출석률 (%)
    # 시스템
    is_grades_visible = Column(Boolean, nullable=False, default=True)
    is_maintenance = Column(Boolean, nullable=False, default=False)
