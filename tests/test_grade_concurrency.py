# tests/test_grade_concurrency.py
"""
두 요청이 같은 새 키로 동시에 성적을 입력하는 상황.
Barrier 로 두 스레드가 모두 "없음"을 본 뒤에 insert 하도록 강제한다.
"""

import threading
from concurrent.futures import ThreadPoolExecutor
from types import SimpleNamespace

from services.errors import StoreError, UniquenessConflict
from services.grade_manager import GradeRecordManager


class InMemoryGradeStore:
    """복합 키 유니크 제약을 가진 메모리 저장소"""

    def __init__(self, barrier=None):
        self.rows = {}
        self.lock = threading.Lock()
        self.barrier = barrier
        self.insert_conflicts = 0
        self._next_id = 1

    def find_one(self, key):
        with self.lock:
            row = self.rows.get(key)
        if self.barrier is not None:
            self.barrier.wait(timeout=5)
        return row

    def insert(self, record):
        with self.lock:
            key = (record["student_id"], record["subject_id"], record["class_id"], record["term"])
            if key in self.rows:
                self.insert_conflicts += 1
                raise UniquenessConflict("duplicate key")
            row = SimpleNamespace(id=self._next_id, **record)
            self._next_id += 1
            self.rows[key] = row
            return row

    def update(self, key, patch):
        with self.lock:
            row = self.rows.get(tuple(key))
            if row is None:
                raise StoreError("missing")
            for field, value in patch.items():
                setattr(row, field, value)
            return row


def test_concurrent_first_submissions_leave_one_row():
    store = InMemoryGradeStore(barrier=threading.Barrier(2))
    manager = GradeRecordManager(store)
    base = {"student_id": 1, "class_id": 1, "subject_id": 1, "term": 1}

    with ThreadPoolExecutor(max_workers=2) as pool:
        futures = [
            pool.submit(manager.submit_grade, {**base, "value": 4.0}),
            pool.submit(manager.submit_grade, {**base, "value": 9.0}),
        ]
        results = [f.result(timeout=10) for f in futures]   # 어느 쪽도 예외가 나면 안 된다

    store.barrier = None
    assert len(store.rows) == 1
    assert store.insert_conflicts == 1
    assert results[0].id == results[1].id

    final = manager.get_grade(1, 1, 1, 1)
    assert final.value in (4.0, 9.0)
