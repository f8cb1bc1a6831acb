from datetime import date
from pydantic import BaseModel, ConfigDict, EmailStr, Field
from typing import Optional

# ✅ 입력용 (POST/PUT 등)
class StudentCreate(BaseModel):
    name: str = Field(..., min_length=3)                 # 학생 이름
    birth_date: date                                     # 생년월일
    class_id: Optional[int] = None                       # 배정할 학급 ID (선택)
    guardian_name: str = Field(..., min_length=3)        # 보호자 이름
    guardian_email: Optional[EmailStr] = None            # 보호자 이메일
    guardian_phone: Optional[str] = Field(default=None, min_length=10)  # 보호자 연락처

# ✅ 전체 출력용 (GET, 상세조회 등)
class Student(BaseModel):
    id: int
    name: str
    birth_date: Optional[date] = None
    class_id: Optional[int] = None                       # 현재 배정 학급
    guardian_name: str
    guardian_email: Optional[str] = None
    guardian_phone: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)
