from sqlalchemy import Column, Integer, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from database.db import Base

class Enrollment(Base):
    __tablename__ = "enrollments"  # 학생 ↔ 학급 배정 테이블
    __table_args__ = (UniqueConstraint("student_id", "class_id", name="uq_enrollments_student_class"),)

    id = Column(Integer, primary_key=True, index=True)
    student_id = Column(Integer, ForeignKey("students.id", ondelete="CASCADE"), nullable=False)
    class_id = Column(Integer, ForeignKey("classes.id", ondelete="CASCADE"), nullable=False)

    student = relationship("Student")
