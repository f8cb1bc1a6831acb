from sqlalchemy import Column, Integer, String, Date, DateTime, func
from database.db import Base

class Student(Base):
    __tablename__ = "students"  # 학생 기본 정보 테이블

    id = Column(Integer, primary_key=True, index=True)               # 고유 학생 ID (Primary Key)
    name = Column(String(100), nullable=False)                      # 학생 이름
    birth_date = Column(Date, nullable=True)                        # 생년월일
    guardian_name = Column(String(100), nullable=False)             # 보호자 이름
    guardian_email = Column(String(100))                            # 보호자 이메일
    guardian_phone = Column(String(20))                             # 보호자 연락처
    created_at = Column(DateTime, server_default=func.now(), nullable=False)
