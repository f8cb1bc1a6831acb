# tests/test_grade_average.py
import pytest

from services.grade_manager import compute_average, round_half_up


def test_average_bounds():
    assert compute_average(10, 10, 10) == 10.0
    assert compute_average(0, 0, 0) == 0.0


@pytest.mark.parametrize(
    "scores, expected",
    [
        ((6, 6, 7), 6.3),     # 6.333...
        ((5, 6, 8), 6.3),     # 6.333...
        ((7, 7, 8), 7.3),     # 7.333...
        ((5, 5, 6), 5.3),     # 5.333...
        ((6, 7, 7), 6.7),     # 6.666...
        ((8, 6, 10), 8.0),
    ],
)
def test_average_rounds_to_one_decimal(scores, expected):
    assert compute_average(*scores) == expected


def test_average_exact_half_rounds_up():
    # 평균이 정확히 6.25 → 6.3 (banker's rounding 이면 6.2)
    assert compute_average(6.25, 6.25, 6.25) == 6.3
    # 평균 7.15 → 7.2
    assert compute_average(7.0, 7.2, 7.25) == 7.2
    # 평균 0.05 → 0.1
    assert compute_average(0.05, 0.05, 0.05) == 0.1


def test_average_stays_in_range_for_sampled_inputs():
    samples = [0, 0.1, 2.5, 4.95, 5, 7.25, 9.99, 10]
    for t in samples:
        for w in samples:
            for p in samples:
                assert 0.0 <= compute_average(t, w, p) <= 10.0


def test_round_half_up_helper():
    assert round_half_up(6.25) == 6.3
    assert round_half_up(2.675, 2) == 2.68     # round()는 2.67
    assert round_half_up(7) == 7.0
