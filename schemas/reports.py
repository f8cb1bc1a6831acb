from pydantic import BaseModel
from typing import List, Literal, Optional


# ✅ 성적표(보고서) 과목별 한 줄
class ReportCardRow(BaseModel):
    subject_id: int
    subject_name: str
    term1: Optional[float] = None
    term2: Optional[float] = None
    term3: Optional[float] = None
    term4: Optional[float] = None
    average: float                                   # 입력된 기간 점수의 평균
    status: Literal["APPROVED", "FAILED"]            # 통과 기준 점수 대비 결과


class ReportCard(BaseModel):
    student_id: int
    student_name: str
    class_id: int
    class_name: str
    passing_grade: float
    rows: List[ReportCardRow]


# ✅ 관리자 대시보드
class RecentGrade(BaseModel):
    id: int
    student_name: str
    subject_name: str
    class_name: str
    term: int
    value: float


class DashboardSummary(BaseModel):
    total_students: int
    total_teachers: int
    total_classes: int
    total_subjects: int
    recent_grades: List[RecentGrade]
