from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, PositiveInt, model_validator

from config.settings import settings


def _score(description: str):
    return Field(default=None, ge=settings.GRADE_MIN, le=settings.GRADE_MAX, description=description)


# ==========================================================
# [입력용 스키마] 성적 입력 (upsert)
# - value 하나만 보내거나 (단일 점수 모드)
# - test/work/participation 세 항목을 보낸다 (생략한 항목은 0점)
# ==========================================================
class GradeSubmission(BaseModel):
    student_id: PositiveInt                          # 학생 ID
    class_id: PositiveInt                            # 학급 ID
    subject_id: PositiveInt                          # 과목 ID
    term: int                                        # 학기/기간 (허용 범위는 학교 설정에 따름)

    value: Optional[float] = _score("단일 점수 (세부 항목 없이 바로 입력)")
    test_score: Optional[float] = _score("시험 점수")
    work_score: Optional[float] = _score("과제 점수")
    participation_score: Optional[float] = _score("태도/참여 점수")

    model_config = ConfigDict(extra="forbid")

    @model_validator(mode="after")
    def _single_or_components(self):
        components = (self.test_score, self.work_score, self.participation_score)
        if self.value is not None and any(c is not None for c in components):
            raise ValueError("value와 세부 점수(test/work/participation)는 함께 보낼 수 없습니다")
        return self

    @property
    def is_single_value(self) -> bool:
        return self.value is not None


# ==========================================================
# [출력용 스키마]
# ==========================================================
class PersistedGrade(BaseModel):
    id: int                                          # 성적 고유 ID
    student_id: int
    class_id: int
    subject_id: int
    term: int
    test_grade: Optional[float] = None               # 시험 점수
    work_grade: Optional[float] = None               # 과제 점수
    behavior_grade: Optional[float] = None           # 태도/참여 점수
    value: float                                     # 최종 점수
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


# ✅ 성적 입력표 한 줄 (학급 명단 + 해당 과목/기간 성적)
class GradeSheetRow(BaseModel):
    student_id: int
    student_name: str
    grade: Optional[PersistedGrade] = None


class GradeSheet(BaseModel):
    class_id: int
    subject_id: int
    term: int
    rows: List[GradeSheetRow]
