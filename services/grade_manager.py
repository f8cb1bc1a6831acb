"""
services/grade_manager.py

성적 입력/수정(upsert) 규칙을 담당한다.
- 세 항목(시험/과제/태도) 평균을 소수 첫째 자리까지 반올림(ROUND_HALF_UP)해 최종 점수로 저장
- (학생, 과목, 학급, 학기) 키당 한 행만 유지. 동시 입력으로 insert 가 중복 키에 걸리면
  update 로 한 번 재시도한다 (마지막 입력이 최종값).
- 역할(권한) 검사나 화면 캐시 갱신은 호출하는 쪽의 책임이다.
"""

import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, Iterable, Mapping, Optional, Union

import pydantic

from schemas.grades import GradeSubmission, PersistedGrade
from services.errors import StoreError, UniquenessConflict, ValidationError
from services.grade_store import GradeKey, GradeStore

logger = logging.getLogger(__name__)

DEFAULT_TERMS = frozenset({1, 2, 3, 4})


def round_half_up(value, places: int = 1) -> float:
    """소수 places 자리까지 사사오입 (6.25 → 6.3). 부동소수점 표현 오차를 피하려고 문자열로 Decimal 변환"""
    exponent = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(exponent, rounding=ROUND_HALF_UP))


def compute_average(test, work, participation) -> float:
    """세 점수의 산술 평균 (소수 첫째 자리, ROUND_HALF_UP). 범위 검사는 하지 않는다."""
    total = sum((Decimal(str(score)) for score in (test, work, participation)), Decimal(0))
    return float((total / 3).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def _field_messages(exc: pydantic.ValidationError) -> Dict[str, str]:
    fields = {}
    for err in exc.errors():
        loc = ".".join(str(part) for part in err["loc"]) or "__root__"
        fields.setdefault(loc, err["msg"])
    return fields


class GradeRecordManager:
    def __init__(self, store: GradeStore, allowed_terms: Iterable[int] = DEFAULT_TERMS):
        self.store = store
        self.allowed_terms = frozenset(allowed_terms)

    # ==========================================================
    # [입력 검증]
    # ==========================================================
    def validate(self, data: Union[GradeSubmission, Mapping[str, Any]]) -> GradeSubmission:
        if isinstance(data, GradeSubmission):
            submission = data
        else:
            try:
                submission = GradeSubmission.model_validate(data)
            except pydantic.ValidationError as e:
                raise ValidationError("성적 입력값이 올바르지 않습니다", _field_messages(e)) from e

        if submission.term not in self.allowed_terms:
            allowed = ", ".join(str(t) for t in sorted(self.allowed_terms))
            raise ValidationError(
                "허용되지 않는 기간입니다",
                {"term": f"term은 {allowed} 중 하나여야 합니다"},
            )
        return submission

    @staticmethod
    def resolve_fields(submission: GradeSubmission) -> Dict[str, Optional[float]]:
        """저장할 점수 컬럼 계산. 단일 점수 모드에서는 세부 항목을 비운다."""
        if submission.is_single_value:
            return {
                "test_grade": None,
                "work_grade": None,
                "behavior_grade": None,
                "value": submission.value,
            }

        test = submission.test_score or 0.0
        work = submission.work_score or 0.0
        participation = submission.participation_score or 0.0
        return {
            "test_grade": test,
            "work_grade": work,
            "behavior_grade": participation,
            "value": compute_average(test, work, participation),
        }

    # ==========================================================
    # [쓰기] 성적 upsert
    # ==========================================================
    def submit_grade(self, data: Union[GradeSubmission, Mapping[str, Any]]) -> PersistedGrade:
        submission = self.validate(data)
        key = GradeKey(
            student_id=submission.student_id,
            subject_id=submission.subject_id,
            class_id=submission.class_id,
            term=submission.term,
        )
        fields = self.resolve_fields(submission)

        existing = self.store.find_one(key)
        if existing is not None:
            row = self.store.update(key, fields)
            logger.info("성적 수정: %s value=%s", tuple(key), row.value)
            return PersistedGrade.model_validate(row)

        try:
            row = self.store.insert({**key._asdict(), **fields})
            logger.info("성적 등록: %s value=%s", tuple(key), row.value)
        except UniquenessConflict:
            # 다른 요청이 먼저 insert 함 → 같은 키를 update 로 한 번만 재시도
            logger.info("동시 입력 감지, update로 재시도: %s", tuple(key))
            try:
                row = self.store.update(key, fields)
            except (UniquenessConflict, StoreError) as e:
                raise StoreError("성적 저장 재시도에 실패했습니다") from e
        return PersistedGrade.model_validate(row)

    # ==========================================================
    # [읽기] 키 단위 조회
    # ==========================================================
    def get_grade(self, student_id: int, class_id: int, subject_id: int, term: int) -> Optional[PersistedGrade]:
        row = self.store.find_one(GradeKey(student_id=student_id, subject_id=subject_id, class_id=class_id, term=term))
        return PersistedGrade.model_validate(row) if row is not None else None
