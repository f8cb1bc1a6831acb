"""
services/school_settings_service.py

학교 전역 설정(단일 행) 조회/저장과 평가 주기 → 허용 기간 변환.
"""

import logging
from datetime import date
from typing import FrozenSet

from sqlalchemy.orm import Session

from models.school_settings import PERIODICITY_TERMS, SchoolSettings as SchoolSettingsModel
from schemas.school_settings import SchoolSettings, SchoolSettingsUpdate

logger = logging.getLogger(__name__)


def default_settings() -> SchoolSettings:
    """설정이 한 번도 저장되지 않았을 때 사용하는 기본값"""
    return SchoolSettings(
        school_name="Escola",
        current_year=str(date.today().year),
        passing_grade=7.0,
        periodicity="BIMESTRAL",
        min_frequency=75.0,
    )


def allowed_terms(periodicity: str) -> FrozenSet[int]:
    """BIMESTRAL → {1,2,3,4}, TRIMESTRAL → {1,2,3}, SEMESTRAL → {1,2}"""
    return frozenset(range(1, PERIODICITY_TERMS[periodicity] + 1))


def get_settings(db: Session) -> SchoolSettings:
    row = db.query(SchoolSettingsModel).order_by(SchoolSettingsModel.id).first()
    if row is None:
        return default_settings()
    return SchoolSettings.model_validate(row)


def upsert_settings(db: Session, payload: SchoolSettingsUpdate) -> SchoolSettings:
    # 첫 번째 설정 행을 수정하고, 없으면 새로 만든다
    row = db.query(SchoolSettingsModel).order_by(SchoolSettingsModel.id).first()
    if row is None:
        row = SchoolSettingsModel(**payload.model_dump())
        db.add(row)
        logger.info("학교 설정 최초 저장: %s", payload.school_name)
    else:
        for key, value in payload.model_dump().items():
            setattr(row, key, value)
    db.commit()
    db.refresh(row)
    return SchoolSettings.model_validate(row)
