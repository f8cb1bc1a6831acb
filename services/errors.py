"""
services/errors.py

도메인 예외 모음.
- 라우터/서비스는 bool이나 dict 대신 아래 예외를 던지고,
  middlewares/error_handler.py 가 공통 JSON 에러 포맷으로 변환한다.
"""

from typing import Dict, Optional


class SchoolError(Exception):
    """모든 도메인 예외의 기반 클래스"""
    code = "SCHOOL_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(SchoolError):
    """입력값 형식/범위 오류 (호출자가 고칠 수 있음). I/O 전에 발생한다."""
    code = "VALIDATION_ERROR"

    def __init__(self, message: str, fields: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.fields = fields or {}


class NotFoundError(SchoolError):
    """참조한 레코드(학생/학급/과목 등)가 존재하지 않음"""
    code = "NOT_FOUND"


class ConflictError(SchoolError):
    """백오피스 중복 검사 실패 (예: 이미 편성된 과목)"""
    code = "CONFLICT"


class UniquenessConflict(SchoolError):
    """insert 시점의 복합 키 중복. 성적 매니저가 update 재시도로 복구한다."""
    code = "UNIQUENESS_CONFLICT"


class StoreError(SchoolError):
    """저장소 장애. 작업은 적용되지 않은 것으로 간주하며 재시도해도 안전하다."""
    code = "STORE_ERROR"
