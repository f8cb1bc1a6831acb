from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional

# ✅ 입력용: POST/PUT 요청에서 사용할 스키마
class SubjectCreate(BaseModel):
    name: str = Field(..., min_length=3)             # 과목 이름
    code: Optional[str] = Field(default=None, max_length=5)  # 과목 약어 (최대 5자)

    @field_validator("code", mode="before")
    @classmethod
    def _blank_code(cls, v):
        # 빈 문자열은 None으로 저장
        if isinstance(v, str) and not v.strip():
            return None
        return v

# ✅ 출력용: GET, POST 응답 등에서 사용할 스키마
class Subject(SubjectCreate):
    id: int                                          # 고유 과목 ID

    model_config = ConfigDict(from_attributes=True)
