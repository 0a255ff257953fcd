"""
Work diary visibility, status transitions and notifications
"""
from datetime import datetime

import pytest

from wms.core import Forbidden, NotFound
from wms.schemas.work_diary import WorkDiaryCreate, WorkDiaryUpdate
from wms.services import WorkDiaryService, NotificationService

from conftest import make_user


def new_diary(db, author, visibility="department", assigned_to=None, title="입고 점검"):
    return WorkDiaryService.create_diary(db, WorkDiaryCreate(
        title=title,
        content="오전 입고분 검수",
        work_date=datetime(2026, 3, 2, 9, 0),
        assigned_to=assigned_to or [],
        visibility=visibility,
    ), author)


@pytest.fixture
def team(db):
    return {
        "author": make_user(db, "kim", "user", department="창고부"),
        "colleague": make_user(db, "park", "user", department="창고부"),
        "outsider": make_user(db, "choi", "user", department="영업부"),
        "boss": make_user(db, "boss", "admin", department="관리부"),
    }


def test_department_diary_visibility(db, team):
    diary = new_diary(db, team["author"])

    assert WorkDiaryService.can_view(db, diary, team["colleague"])
    assert not WorkDiaryService.can_view(db, diary, team["outsider"])
    assert WorkDiaryService.can_view(db, diary, team["boss"])


def test_private_diary_visible_to_assignees_only(db, team):
    diary = new_diary(db, team["author"], visibility="private", assigned_to=[team["outsider"].id])

    assert WorkDiaryService.can_view(db, diary, team["outsider"])
    assert not WorkDiaryService.can_view(db, diary, team["colleague"])
    assert WorkDiaryService.can_view(db, diary, team["author"])


def test_new_diary_notifies_department_except_author(db, team):
    new_diary(db, team["author"])

    assert NotificationService.unread_count(db, team["colleague"].id) == 1
    assert NotificationService.unread_count(db, team["author"].id) == 0
    assert NotificationService.unread_count(db, team["outsider"].id) == 0
    notice = NotificationService.list_for_user(db, team["colleague"].id)[0]
    assert notice.type == "new_diary"
    assert notice.message == "kim님이 새로운 업무일지를 작성했습니다: 입고 점검"


def test_public_diary_notifies_everyone(db, team):
    new_diary(db, team["author"], visibility="public")
    for key in ("colleague", "outsider", "boss"):
        assert NotificationService.unread_count(db, team[key].id) == 1


def test_assignee_reading_moves_pending_to_in_progress(db, team):
    diary = new_diary(db, team["author"], assigned_to=[team["colleague"].id])

    listed = WorkDiaryService.list_diaries(db, team["colleague"])

    assert [d.id for d in listed] == [diary.id]
    db.refresh(diary)
    assert diary.status == "in_progress"
    notice = NotificationService.list_for_user(db, team["author"].id)[0]
    assert notice.type == "status_change"
    assert notice.message == "park님이 업무를 확인했습니다."


def test_reading_again_does_not_notify_twice(db, team):
    diary = new_diary(db, team["author"], assigned_to=[team["colleague"].id])
    WorkDiaryService.get_diary(db, diary.id, team["colleague"])
    WorkDiaryService.get_diary(db, diary.id, team["colleague"])

    assert NotificationService.unread_count(db, team["author"].id) == 1


def test_non_assignee_reading_keeps_pending(db, team):
    diary = new_diary(db, team["author"])
    WorkDiaryService.get_diary(db, diary.id, team["colleague"])
    db.refresh(diary)
    assert diary.status == "pending"


def test_get_diary_forbidden_and_missing(db, team):
    diary = new_diary(db, team["author"])
    with pytest.raises(Forbidden):
        WorkDiaryService.get_diary(db, diary.id, team["outsider"])
    with pytest.raises(NotFound):
        WorkDiaryService.get_diary(db, 999, team["author"])


def test_complete_by_assignee(db, team):
    diary = new_diary(db, team["author"], assigned_to=[team["colleague"].id])

    result = WorkDiaryService.complete_diary(db, diary.id, team["colleague"])

    assert result["already_completed"] is False
    db.refresh(diary)
    assert diary.status == "completed"
    messages = [n.message for n in NotificationService.list_for_user(db, team["author"].id)]
    assert "park님이 업무를 완료했습니다: 입고 점검" in messages

    again = WorkDiaryService.complete_diary(db, diary.id, team["colleague"])
    assert again["already_completed"] is True


def test_complete_requires_assignee(db, team):
    diary = new_diary(db, team["author"], assigned_to=[team["colleague"].id])
    with pytest.raises(Forbidden):
        WorkDiaryService.complete_diary(db, diary.id, team["outsider"])


def test_assignee_from_another_department_can_read_and_complete(db, team):
    diary = new_diary(db, team["author"], assigned_to=[team["outsider"].id])

    assert WorkDiaryService.can_view(db, diary, team["outsider"])
    read = WorkDiaryService.get_diary(db, diary.id, team["outsider"])
    assert read.status == "in_progress"
    assert [d.id for d in WorkDiaryService.list_diaries(db, team["outsider"])] == [diary.id]

    result = WorkDiaryService.complete_diary(db, diary.id, team["outsider"])
    assert result["already_completed"] is False


def test_update_only_by_author_or_admin(db, team):
    diary = new_diary(db, team["author"])

    with pytest.raises(Forbidden):
        WorkDiaryService.update_diary(db, diary.id, WorkDiaryUpdate(title="x"), team["colleague"])

    updated = WorkDiaryService.update_diary(db, diary.id, WorkDiaryUpdate(priority="urgent"), team["boss"])
    assert updated.priority == "urgent"
    assert updated.title == "입고 점검"


def test_date_range_filter(db, team):
    new_diary(db, team["author"], title="3월")
    WorkDiaryService.create_diary(db, WorkDiaryCreate(
        title="4월", content="c", work_date=datetime(2026, 4, 1, 9, 0)
    ), team["author"])

    listed = WorkDiaryService.list_diaries(
        db, team["author"], start_date=datetime(2026, 3, 15), end_date=datetime(2026, 4, 30)
    )
    assert [d.title for d in listed] == ["4월"]


def test_comment_notifies_author_and_delete_cascades(db, team):
    diary = new_diary(db, team["author"])
    WorkDiaryService.add_comment(db, diary.id, "확인했습니다", team["colleague"])

    notices = NotificationService.list_for_user(db, team["author"].id)
    assert notices[0].type == "comment"
    assert notices[0].message == "park님이 댓글을 남겼습니다: 입고 점검"
    assert len(WorkDiaryService.list_comments(db, diary.id)) == 1

    assert WorkDiaryService.delete_diary(db, diary.id) is True
    assert WorkDiaryService.list_comments(db, diary.id) == []


def test_mark_read_is_scoped_to_owner(db, team):
    new_diary(db, team["author"])
    notice = NotificationService.list_for_user(db, team["colleague"].id)[0]

    with pytest.raises(NotFound):
        NotificationService.mark_read(db, notice.id, team["outsider"].id)

    assert NotificationService.mark_read(db, notice.id, team["colleague"].id).read is True
    assert NotificationService.unread_count(db, team["colleague"].id) == 0


def test_mark_all_read(db, team):
    new_diary(db, team["author"], title="1")
    new_diary(db, team["author"], title="2")

    assert NotificationService.mark_all_read(db, team["colleague"].id) == 2
    assert NotificationService.unread_count(db, team["colleague"].id) == 0
