import pytest
from sqlalchemy import select

from handbook.core.errors import Forbidden, NotFound, ValidationError
from handbook.models.course import Comment, Course
from handbook.services import auth as auth_service
from handbook.services import courses as course_service

from tests.conftest import OTHER_USERNAME


async def _comment(db, token, code="COMP1511", text="Great course", difficulty=3, usefulness=4, workload=2):
    return await course_service.create_comment(db, code, token, text, difficulty, usefulness, workload)


async def test_comment_on_course_without_aggregate_creates_it(db, make_user):
    tokens = await make_user()
    assert (await db.execute(select(Course))).scalars().all() == []

    created = await _comment(db, tokens.access_token, code="comp1511")
    assert created.course_code == "COMP1511"

    courses = (await db.execute(select(Course))).scalars().all()
    assert [c.course_code for c in courses] == ["COMP1511"]

    info = await course_service.get_course_info(db, "COMP1511")
    assert info.basic_info.code == "COMP1511"
    assert len(info.comments) == 1
    comment = info.comments[0]
    assert comment.comment_id == created.comment_id
    assert comment.text == "Great course"
    assert (comment.difficulty, comment.usefulness, comment.workload) == (3, 4, 2)
    assert comment.nickname.startswith("user")


async def test_course_info_without_comments_creates_empty_aggregate(db):
    info = await course_service.get_course_info(db, "comp2521")
    assert info.basic_info.name == "Data Structures and Algorithms"
    assert info.comments == []
    assert (await db.execute(select(Course.course_code))).scalars().all() == ["COMP2521"]


async def test_unknown_course_not_found(db, make_user):
    tokens = await make_user()
    with pytest.raises(NotFound):
        await course_service.get_course_info(db, "NOPE1000")
    with pytest.raises(NotFound):
        await _comment(db, tokens.access_token, code="NOPE1000")


@pytest.mark.parametrize("missing", ["difficulty", "usefulness", "workload"])
async def test_missing_rating_is_rejected(db, make_user, missing):
    tokens = await make_user()
    ratings = {"difficulty": 3, "usefulness": 4, "workload": 2, missing: None}
    with pytest.raises(ValidationError, match=missing):
        await _comment(db, tokens.access_token, **ratings)
    assert (await db.execute(select(Comment))).scalars().all() == []


@pytest.mark.parametrize("value", [0, 6, -1])
async def test_out_of_range_rating_is_rejected(db, make_user, value):
    tokens = await make_user()
    with pytest.raises(ValidationError):
        await _comment(db, tokens.access_token, usefulness=value)


async def test_comments_keep_insertion_order(db, make_user):
    tokens = await make_user()
    for text in ["first", "second", "third"]:
        await _comment(db, tokens.access_token, text=text)

    info = await course_service.get_course_info(db, "COMP1511")
    assert [c.text for c in info.comments] == ["first", "second", "third"]


async def test_nickname_change_relabels_past_comments(db, make_user):
    tokens = await make_user()
    await _comment(db, tokens.access_token, code="COMP1511")
    await _comment(db, tokens.access_token, code="COMP2521")

    await auth_service.submit_nickname(db, tokens.access_token, "Glenn")

    for code in ["COMP1511", "COMP2521"]:
        info = await course_service.get_course_info(db, code)
        assert [c.nickname for c in info.comments] == ["Glenn"]


async def test_delete_comment_removes_it_from_one_course(db, make_user):
    tokens = await make_user()
    keep = await _comment(db, tokens.access_token, code="COMP1511", text="keep")
    gone = await _comment(db, tokens.access_token, code="COMP2521", text="gone")

    result = await course_service.delete_comment(db, gone.comment_id, tokens.access_token)
    assert result.message == f"{gone.comment_id} has been deleted"

    assert (await course_service.get_course_info(db, "COMP2521")).comments == []
    remaining = (await course_service.get_course_info(db, "COMP1511")).comments
    assert [c.comment_id for c in remaining] == [keep.comment_id]


async def test_delete_unknown_or_already_deleted_comment_not_found(db, make_user):
    tokens = await make_user()
    created = await _comment(db, tokens.access_token)
    await course_service.delete_comment(db, created.comment_id, tokens.access_token)

    with pytest.raises(NotFound):
        await course_service.delete_comment(db, created.comment_id, tokens.access_token)
    with pytest.raises(NotFound):
        await course_service.delete_comment(db, "0" * 32, tokens.access_token)


async def test_only_author_may_delete_under_owner_policy(db, make_user):
    author = await make_user()
    other = await make_user(OTHER_USERNAME)
    created = await _comment(db, author.access_token)

    with pytest.raises(Forbidden):
        await course_service.delete_comment(db, created.comment_id, other.access_token)
    assert len((await course_service.get_course_info(db, "COMP1511")).comments) == 1


async def test_any_user_may_delete_under_any_policy(db, make_user, monkeypatch):
    monkeypatch.setenv("COMMENT_DELETE_POLICY", "any")
    author = await make_user()
    other = await make_user(OTHER_USERNAME)
    created = await _comment(db, author.access_token)

    await course_service.delete_comment(db, created.comment_id, other.access_token)
    assert (await course_service.get_course_info(db, "COMP1511")).comments == []
