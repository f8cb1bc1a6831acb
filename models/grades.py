from sqlalchemy import Column, Integer, Float, DateTime, ForeignKey, UniqueConstraint, func
from sqlalchemy.orm import relationship
from database.db import Base


class Grade(Base):
    __tablename__ = "grades"  # 학생/과목/학급/학기별 성적 테이블

    # ✅ (학생, 과목, 학급, 학기) 조합은 한 행만 존재 (DB 레벨 유니크 제약)
    __table_args__ = (
        UniqueConstraint(
            "student_id", "subject_id", "class_id", "term",
            name="uq_grades_student_subject_class_term",
        ),
    )

    id = Column(Integer, primary_key=True, index=True)                       # 성적 고유 ID (PK)
    student_id = Column(Integer, ForeignKey("students.id", ondelete="CASCADE"), nullable=False)
    subject_id = Column(Integer, ForeignKey("subjects.id"), nullable=False)   # 성적이 있는 과목은 삭제 불가
    class_id = Column(Integer, ForeignKey("classes.id", ondelete="CASCADE"), nullable=False)
    term = Column(Integer, nullable=False)                                   # 학기/기간 (1~4)

    test_grade = Column(Float, nullable=True)                                # 시험 점수 (0~10)
    work_grade = Column(Float, nullable=True)                                # 과제 점수 (0~10)
    behavior_grade = Column(Float, nullable=True)                            # 태도/참여 점수 (0~10)
    value = Column(Float, nullable=False)                                    # 최종 점수 (세 항목 평균 또는 단일 점수)

    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)

    student = relationship("Student")
    subject = relationship("Subject")
    school_class = relationship("Class")
