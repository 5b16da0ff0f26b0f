import pytest

from backend.models import ExercisePRs, RepPR
from backend.prs import get_exercise_prs, pr_rows, update_pr


@pytest.mark.parametrize("reps", [-1, 0, 16, 50])
def test_reps_outside_band_are_ignored(reps):
    prs = {}
    assert update_pr(prs, "squat", reps, 500, 1) is prs


def test_first_set_creates_record():
    prs = update_pr({}, "squat", 5, 225, 10)
    assert prs["squat"].by_reps[5] == RepPR(reps=5, weight_lb=225, date=10)


def test_heavier_set_replaces_record_and_date():
    prs = update_pr({}, "squat", 5, 225, 10)
    updated = update_pr(prs, "squat", 5, 230, 20)
    assert updated is not prs
    assert updated["squat"].by_reps[5] == RepPR(reps=5, weight_lb=230, date=20)
    # input left untouched
    assert prs["squat"].by_reps[5].weight_lb == 225


@pytest.mark.parametrize("weight", [225, 200, 0])
def test_ties_and_lighter_sets_leave_table_unchanged(weight):
    prs = update_pr({}, "squat", 5, 225, 10)
    assert update_pr(prs, "squat", 5, weight, 99) is prs
    assert prs["squat"].by_reps[5].date == 10


def test_other_entries_are_shared():
    prs = update_pr({}, "squat", 5, 225, 10)
    prs = update_pr(prs, "bench_press", 5, 185, 11)
    bench = prs["bench_press"]
    updated = update_pr(prs, "squat", 3, 245, 12)
    assert updated["bench_press"] is bench
    assert set(updated["squat"].by_reps) == {3, 5}


def test_get_exercise_prs_defaults_to_empty():
    entry = get_exercise_prs({}, "deadlift")
    assert entry == ExercisePRs(exercise_id="deadlift", by_reps={})


def test_pr_rows():
    entry = update_pr({}, "squat", 5, 100, 1)["squat"]
    rows = pr_rows(entry, "kg")
    assert len(rows) == 15
    assert rows[0] == (1, "-")
    assert rows[4] == (5, "45.4 kg")
    assert pr_rows(entry, "lb")[4] == (5, "100 lb")
