from pydantic import BaseModel, ConfigDict, EmailStr, Field
from typing import List

# ✅ 입력용 스키마: 교사 생성/수정
class TeacherCreate(BaseModel):
    name: str = Field(..., min_length=1)             # 교사 이름
    email: EmailStr                                  # 이메일 (중복 불가)
    subject_ids: List[int] = []                      # 담당 과목 ID 목록
    class_ids: List[int] = []                        # 담당 학급 ID 목록

# ✅ 출력용 스키마
class Teacher(BaseModel):
    id: int                                          # 고유 교사 ID
    name: str
    email: str
    subject_ids: List[int] = []
    class_ids: List[int] = []

    model_config = ConfigDict(from_attributes=True)
