import csv
import logging
import sys

from sqlalchemy.orm import Session

from database.db import SessionLocal, init_db
from services.errors import SchoolError
from services.grade_manager import GradeRecordManager
from services.grade_store import GradeStore
from services.school_settings_service import allowed_terms, get_settings

logger = logging.getLogger(__name__)

CSV_PATH = "data/grades.csv"  # ✅ 파일 경로

# CSV 컬럼: student_id, class_id, subject_id, term, value | test_score, work_score, participation_score
_NUMERIC = ("value", "test_score", "work_score", "participation_score")


def _row_to_payload(row: dict) -> dict:
    payload = {
        "student_id": row["student_id"],
        "class_id": row["class_id"],
        "subject_id": row["subject_id"],
        "term": row["term"],
    }
    for column in _NUMERIC:
        raw = (row.get(column) or "").strip()
        if raw:
            payload[column] = raw.replace(",", ".")   # 소수점 쉼표 허용 (예: 7,5)
    return payload


def import_grades(path: str = CSV_PATH, db: Session = None):
    """
    CSV 성적을 GradeRecordManager 로 입력한다.
    - 같은 파일을 다시 돌려도 (학생, 과목, 학급, 기간)당 한 행만 유지된다
    - 잘못된 행은 건너뛰고 개수를 돌려준다
    """
    owns_session = db is None
    db = db or SessionLocal()
    saved, failed = 0, 0
    try:
        periodicity = get_settings(db).periodicity
        manager = GradeRecordManager(GradeStore(db), allowed_terms=allowed_terms(periodicity))

        with open(path, newline="", encoding="utf-8-sig") as csvfile:
            reader = csv.DictReader(csvfile)
            for line_no, row in enumerate(reader, start=2):
                try:
                    manager.submit_grade(_row_to_payload(row))
                    saved += 1
                except SchoolError as e:
                    failed += 1
                    logger.warning("%d행 건너뜀: %s", line_no, e.message)
    finally:
        if owns_session:
            db.close()

    logger.info("성적 CSV → DB 입력 완료: 저장 %d건, 실패 %d건", saved, failed)
    return saved, failed


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    init_db()
    import_grades(sys.argv[1] if len(sys.argv) > 1 else CSV_PATH)
