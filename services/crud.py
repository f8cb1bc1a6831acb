"""
services/crud.py

백오피스 CRUD 라우터가 공통으로 쓰는 헬퍼.
"""

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from services.errors import ConflictError, NotFoundError, StoreError, UniquenessConflict
from services.grade_store import classify_integrity_error


def get_or_404(db: Session, model, entity_id: int, label: str):
    obj = db.query(model).filter(model.id == entity_id).first()
    if obj is None:
        raise NotFoundError(f"{label} 정보를 찾을 수 없습니다 (id={entity_id})")
    return obj


def commit_or_raise(db: Session, conflict_message: str):
    """commit 실패를 도메인 예외로 변환 (중복 → ConflictError)"""
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        error = classify_integrity_error(e)
        if isinstance(error, UniquenessConflict):
            raise ConflictError(conflict_message) from e
        raise error from e
    except SQLAlchemyError as e:
        db.rollback()
        raise StoreError("저장 중 저장소 오류가 발생했습니다") from e
