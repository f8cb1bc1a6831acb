# tests/test_grade_manager.py
import pytest
from sqlalchemy.exc import OperationalError

from models.grades import Grade as GradeModel
from services.errors import NotFoundError, StoreError, ValidationError
from services.grade_manager import GradeRecordManager
from services.grade_store import GradeStore


def _payload(seed, **scores):
    return {
        "student_id": seed.ana_id,
        "class_id": seed.class_id,
        "subject_id": seed.math_id,
        "term": 1,
        **scores,
    }


def _count(db, seed, term=1):
    return (
        db.query(GradeModel)
        .filter(
            GradeModel.student_id == seed.ana_id,
            GradeModel.class_id == seed.class_id,
            GradeModel.subject_id == seed.math_id,
            GradeModel.term == term,
        )
        .count()
    )


@pytest.fixture
def manager(db):
    return GradeRecordManager(GradeStore(db))


# ==========================================================
# upsert
# ==========================================================

def test_submit_creates_then_updates_same_record(db, seed, manager):
    first = manager.submit_grade(_payload(seed, test_score=8, work_score=6, participation_score=10))
    assert first.value == 8.0
    assert (first.test_grade, first.work_grade, first.behavior_grade) == (8.0, 6.0, 10.0)

    second = manager.submit_grade(_payload(seed, test_score=5, work_score=5, participation_score=5))
    assert second.id == first.id
    assert second.value == 5.0
    assert _count(db, seed) == 1

    fetched = manager.get_grade(seed.ana_id, seed.class_id, seed.math_id, 1)
    assert fetched.id == first.id
    assert fetched.value == 5.0


def test_identical_submissions_leave_one_record(db, seed, manager):
    payload = _payload(seed, test_score=7, work_score=7, participation_score=8)
    a = manager.submit_grade(payload)
    b = manager.submit_grade(payload)
    assert a.id == b.id
    assert b.value == 7.3
    assert _count(db, seed) == 1


def test_different_terms_are_different_records(db, seed, manager):
    a = manager.submit_grade(_payload(seed, value=6.0))
    b = manager.submit_grade({**_payload(seed, value=9.0), "term": 2})
    assert a.id != b.id
    assert _count(db, seed, term=1) == 1
    assert _count(db, seed, term=2) == 1


def test_omitted_components_default_to_zero(seed, manager):
    grade = manager.submit_grade(_payload(seed, test_score=9))
    assert (grade.test_grade, grade.work_grade, grade.behavior_grade) == (9.0, 0.0, 0.0)
    assert grade.value == 3.0


def test_single_value_is_stored_directly_without_components(seed, manager):
    manager.submit_grade(_payload(seed, test_score=8, work_score=6, participation_score=10))
    grade = manager.submit_grade(_payload(seed, value=6.75))
    assert grade.value == 6.75
    assert grade.test_grade is None
    assert grade.work_grade is None
    assert grade.behavior_grade is None


def test_get_grade_returns_none_for_unseen_key(seed, manager):
    assert manager.get_grade(seed.ana_id, seed.class_id, seed.math_id, 3) is None


# ==========================================================
# 검증 실패 → 아무것도 저장하지 않음
# ==========================================================

@pytest.mark.parametrize(
    "scores, field",
    [
        ({"test_score": 11}, "test_score"),
        ({"work_score": -0.5}, "work_score"),
        ({"participation_score": 10.01}, "participation_score"),
        ({"value": 12}, "value"),
    ],
)
def test_out_of_range_score_is_rejected(db, seed, manager, scores, field):
    with pytest.raises(ValidationError) as exc_info:
        manager.submit_grade(_payload(seed, **scores))
    assert field in exc_info.value.fields
    assert manager.get_grade(seed.ana_id, seed.class_id, seed.math_id, 1) is None
    assert _count(db, seed) == 0


def test_term_outside_allowed_set_is_rejected(seed, manager):
    with pytest.raises(ValidationError) as exc_info:
        manager.submit_grade({**_payload(seed, value=5), "term": 5})
    assert "term" in exc_info.value.fields


def test_allowed_terms_follow_configuration(db, seed):
    semestral = GradeRecordManager(GradeStore(db), allowed_terms={1, 2})
    semestral.submit_grade({**_payload(seed, value=5), "term": 2})
    with pytest.raises(ValidationError):
        semestral.submit_grade({**_payload(seed, value=5), "term": 3})


@pytest.mark.parametrize("bad_id", [None, 0, -3, "abc"])
def test_malformed_identifier_is_rejected(seed, manager, bad_id):
    with pytest.raises(ValidationError) as exc_info:
        manager.submit_grade({**_payload(seed, value=5), "student_id": bad_id})
    assert "student_id" in exc_info.value.fields


def test_value_with_components_is_ambiguous(seed, manager):
    with pytest.raises(ValidationError):
        manager.submit_grade(_payload(seed, value=5, test_score=5))


# ==========================================================
# 저장소 오류
# ==========================================================

def test_missing_reference_raises_not_found(db, seed, manager):
    with pytest.raises(NotFoundError):
        manager.submit_grade({**_payload(seed, value=5), "student_id": 9999})
    assert db.query(GradeModel).count() == 0


def test_store_failure_is_reported_and_not_applied(db, seed, manager, monkeypatch):
    def _broken_commit():
        raise OperationalError("COMMIT", {}, Exception("connection lost"))

    monkeypatch.setattr(db, "commit", _broken_commit)
    with pytest.raises(StoreError):
        manager.submit_grade(_payload(seed, value=5))
    monkeypatch.undo()

    assert manager.get_grade(seed.ana_id, seed.class_id, seed.math_id, 1) is None


# ==========================================================
# 조회-후-삽입 경쟁 상태
# ==========================================================

class RacingStore(GradeStore):
    """첫 조회 직후 다른 요청이 같은 키를 먼저 저장한 상황을 재현"""

    def __init__(self, db, competitor):
        super().__init__(db)
        self.competitor = competitor
        self.raced = False

    def find_one(self, key):
        if not self.raced:
            self.raced = True
            self.competitor()
            return None
        return super().find_one(key)


def test_insert_conflict_is_retried_as_update(db, session_factory, seed):
    def competitor():
        other = session_factory()
        try:
            GradeRecordManager(GradeStore(other)).submit_grade(_payload(seed, value=2.0))
        finally:
            other.close()

    manager = GradeRecordManager(RacingStore(db, competitor))
    grade = manager.submit_grade(_payload(seed, test_score=8, work_score=6, participation_score=10))

    assert grade.value == 8.0
    assert _count(db, seed) == 1


class AlwaysMissingStore(GradeStore):
    def find_one(self, key):
        return None


def test_failed_retry_escalates_to_store_error(db, seed):
    GradeRecordManager(GradeStore(db)).submit_grade(_payload(seed, value=4.0))

    manager = GradeRecordManager(AlwaysMissingStore(db))
    with pytest.raises(StoreError):
        manager.submit_grade(_payload(seed, value=9.0))

    assert GradeRecordManager(GradeStore(db)).get_grade(seed.ana_id, seed.class_id, seed.math_id, 1).value == 4.0
