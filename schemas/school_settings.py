from pydantic import BaseModel, ConfigDict, Field
from typing import Literal, Optional

Periodicity = Literal["BIMESTRAL", "TRIMESTRAL", "SEMESTRAL"]


# ==========================================================
# [입력용 스키마] 학교 설정 저장
# ==========================================================
class SchoolSettingsUpdate(BaseModel):
    # 프로필
    school_name: str = Field(..., min_length=3)                 # 학교 이름
    school_logo: Optional[str] = None                           # 로고 이미지 경로
    cnpj: Optional[str] = None                                  # 사업자 등록 번호
    address: Optional[str] = None
    phone: Optional[str] = None

    # 학사
    current_year: str = Field(..., min_length=4)                # 현재 학년도 (예: "2025")
    passing_grade: float = Field(..., ge=0, le=10)              # 통과 기준 점수
    periodicity: Periodicity = "BIMESTRAL"                      # 평가 주기
    min_frequency: float = Field(75.0, ge=0, le=100)            # 최소 출석률 (%)

    # 시스템
    is_grades_visible: bool = True                              # 학부모에게 성적 공개 여부
    is_maintenance: bool = False                                # 점검 모드


# ==========================================================
# [출력용 스키마]
# ==========================================================
class SchoolSettings(SchoolSettingsUpdate):
    id: Optional[int] = None                                    # 아직 저장 전이면 None

    model_config = ConfigDict(from_attributes=True)
