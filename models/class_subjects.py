from sqlalchemy import Column, Integer, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from database.db import Base

class ClassSubject(Base):
    __tablename__ = "class_subjects"  # 학급별 편성 과목 (교육과정)
    __table_args__ = (UniqueConstraint("class_id", "subject_id", name="uq_class_subjects_class_subject"),)

    id = Column(Integer, primary_key=True, index=True)
    class_id = Column(Integer, ForeignKey("classes.id", ondelete="CASCADE"), nullable=False)
    subject_id = Column(Integer, ForeignKey("subjects.id", ondelete="CASCADE"), nullable=False)
    teacher_id = Column(Integer, ForeignKey("teachers.id", ondelete="SET NULL"), nullable=True)  # 담당 교사 (선택)

    subject = relationship("Subject")
    teacher = relationship("Teacher")
