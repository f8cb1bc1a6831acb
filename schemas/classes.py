from pydantic import BaseModel, ConfigDict, Field
from typing import Literal, Optional

Shift = Literal["MORNING", "AFTERNOON", "EVENING", "FULLTIME"]
Segment = Literal["INFANTIL", "FUNDAMENTAL_I", "FUNDAMENTAL_II", "MEDIO"]


# ✅ 생성(Create) 요청용 스키마
# → id는 DB에서 자동 생성되므로 제외
class ClassCreate(BaseModel):
    name: str = Field(..., min_length=1)             # 학급 이름
    grade: str = Field(..., min_length=1)            # 학년 표기
    year: int = Field(..., ge=2020)                  # 학년도
    shift: Shift                                     # 시간대
    segment: Segment                                 # 학교 단계


# ✅ 응답(Response) / 조회(Read) 용 스키마
class Class(ClassCreate):
    id: int                                          # 학급 고유 ID (PK)

    model_config = ConfigDict(from_attributes=True)


# ✅ 학급에 과목 편성
class ClassSubjectCreate(BaseModel):
    subject_id: int
    teacher_id: Optional[int] = None                 # 담당 교사 (선택)


class ClassSubject(BaseModel):
    id: int
    class_id: int
    subject_id: int
    teacher_id: Optional[int] = None

    model_config = ConfigDict(from_attributes=True)
