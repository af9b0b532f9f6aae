from types import SimpleNamespace

import pytest

from handbook.services import courses as course_service
from handbook.services.ranking import average_ratings, rank_courses, recommend_courses

from tests.conftest import OTHER_USERNAME


def _c(difficulty, usefulness, workload):
    return SimpleNamespace(difficulty=difficulty, usefulness=usefulness, workload=workload)


def test_usefulness_first_then_lighter_workload():
    aggregates = {
        "C1": [_c(3, 4, 2)],
        "C2": [_c(3, 4, 1)],
        "C3": [_c(3, 5, 5)],
    }
    assert [r.course_code for r in rank_courses(aggregates)] == ["C3", "C2", "C1"]


def test_difficulty_breaks_remaining_ties():
    aggregates = {
        "HARD": [_c(5, 4, 2)],
        "EASY": [_c(1, 4, 2)],
    }
    assert [r.course_code for r in rank_courses(aggregates)] == ["EASY", "HARD"]


def test_averages_each_dimension():
    avg = average_ratings("C1", [_c(1, 3, 2), _c(2, 5, 5)])
    assert (avg.difficulty, avg.usefulness, avg.workload) == (1.5, 4.0, 3.5)


def test_courses_without_comments_are_left_out():
    assert average_ratings("EMPTY", []) is None
    ranked = rank_courses({"EMPTY": [], "C1": [_c(2, 2, 2)]})
    assert [r.course_code for r in ranked] == ["C1"]


def test_returns_at_most_limit_entries():
    aggregates = {f"C{i}": [_c(3, i % 5 + 1, 3)] for i in range(8)}
    assert len(rank_courses(aggregates)) == 5
    assert len(rank_courses(aggregates, limit=2)) == 2


async def test_recommend_courses_reads_all_aggregates(db, make_user):
    first = (await make_user()).access_token
    second = (await make_user(OTHER_USERNAME)).access_token

    # COMP1511: usefulness avg 4, workload avg 2
    await course_service.create_comment(db, "COMP1511", first, "", 3, 5, 2)
    await course_service.create_comment(db, "COMP1511", second, "", 3, 3, 2)
    # COMP2521: usefulness 4, workload 1
    await course_service.create_comment(db, "COMP2521", first, "", 3, 4, 1)
    # COMP3431: usefulness 5, workload 5
    await course_service.create_comment(db, "COMP3431", first, "", 3, 5, 5)
    # aggregate without comments
    await course_service.get_course_info(db, "COMP1531")

    ranked = await recommend_courses(db)
    assert [r.course_code for r in ranked] == ["COMP3431", "COMP2521", "COMP1511"]
    assert ranked[2].usefulness == pytest.approx(4.0)
    assert ranked[2].workload == pytest.approx(2.0)
