"""
services/grade_store.py

성적 테이블 전용 저장소 (SQLAlchemy 세션 기반).
- find_one / insert / update 세 가지만 제공하며, 각 호출이 한 행 단위 트랜잭션이다.
- IntegrityError 는 원인에 따라 UniquenessConflict / NotFoundError / StoreError 로 분류한다.
"""

import logging
from typing import Any, Dict, NamedTuple, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from models.grades import Grade as GradeModel
from services.errors import NotFoundError, SchoolError, StoreError, UniquenessConflict

logger = logging.getLogger(__name__)

# MySQL 에러 코드: 1062 중복 키, 1451/1452 외래 키
_MYSQL_DUPLICATE = 1062
_MYSQL_FOREIGN_KEY = (1451, 1452)
_DUPLICATE_MARKERS = ("unique constraint", "duplicate entry", "duplicate key")


class GradeKey(NamedTuple):
    """성적 한 행을 식별하는 복합 키"""
    student_id: int
    subject_id: int
    class_id: int
    term: int


def classify_integrity_error(exc: IntegrityError) -> SchoolError:
    """드라이버별 IntegrityError 를 도메인 예외로 변환"""
    orig = getattr(exc, "orig", None)
    code = orig.args[0] if orig is not None and getattr(orig, "args", None) else None
    text = str(orig if orig is not None else exc).lower()

    if code == _MYSQL_DUPLICATE or any(marker in text for marker in _DUPLICATE_MARKERS):
        return UniquenessConflict("이미 같은 키의 레코드가 존재합니다")
    if code in _MYSQL_FOREIGN_KEY or "foreign key" in text:
        return NotFoundError("참조한 레코드가 존재하지 않습니다")
    return StoreError("저장소 제약 조건 위반으로 저장하지 못했습니다")


class GradeStore:
    def __init__(self, db: Session):
        self.db = db

    def _query(self, key: GradeKey):
        return self.db.query(GradeModel).filter(
            GradeModel.student_id == key.student_id,
            GradeModel.subject_id == key.subject_id,
            GradeModel.class_id == key.class_id,
            GradeModel.term == key.term,
        )

    def find_one(self, key: GradeKey) -> Optional[GradeModel]:
        try:
            return self._query(key).first()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("성적 조회 실패: %s", key)
            raise StoreError("성적 조회 중 저장소 오류가 발생했습니다") from e

    def insert(self, record: Dict[str, Any]) -> GradeModel:
        row = GradeModel(**record)
        self.db.add(row)
        self._commit()
        self.db.refresh(row)
        return row

    def update(self, key: GradeKey, patch: Dict[str, Any]) -> GradeModel:
        row = self.find_one(key)
        if row is None:
            # 조회와 수정 사이에 삭제된 경우
            raise StoreError("수정할 성적 레코드를 찾지 못했습니다")
        for field, value in patch.items():
            setattr(row, field, value)
        self._commit()
        self.db.refresh(row)
        return row

    def _commit(self):
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            error = classify_integrity_error(e)
            if isinstance(error, StoreError):
                logger.exception("성적 저장 실패 (제약 조건)")
            raise error from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("성적 저장 실패")
            raise StoreError("성적 저장 중 저장소 오류가 발생했습니다") from e
