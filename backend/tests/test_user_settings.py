"""User settings page: validation, upsert and redirects."""
import pytest

from app.core.database import SessionLocal
from app.models import User, UserPreference
from app.schemas.course_recent import UserSettingsSubmit
from app.services import user_settings
from tests.conftest import client

URL = "/blocks/course_recent/usersettings"


def _count(db, user_id):
    return db.query(UserPreference).filter(UserPreference.user_id == user_id).count()


@pytest.mark.parametrize("value", list(range(1, 11)))
def test_validate_accepts_range(value):
    assert user_settings.validate(UserSettingsSubmit(userlimit=value)) == {}


@pytest.mark.parametrize("value", [0, -1, -100])
def test_validate_rejects_below_lower_bound(value):
    errors = user_settings.validate(UserSettingsSubmit(userlimit=value))
    assert errors == {"userlimit": "The number cannot be less than 1"}


@pytest.mark.parametrize("value", [11, 12, 1000])
def test_validate_rejects_above_upper_bound(value):
    errors = user_settings.validate(UserSettingsSubmit(userlimit=value))
    assert errors == {"userlimit": "The number cannot be greater than 10"}


def test_validate_requires_value():
    assert "userlimit" in user_settings.validate(UserSettingsSubmit())


def test_load_form_defaults_for_new_user(db_session, student_user):
    user, _ = student_user
    form = user_settings.load_form(db_session, user, 4)
    assert form.id == 0
    assert form.userid == user.id
    assert form.userlimit == 5
    assert form.courseid == 4
    assert form.choices == list(range(1, 11))


def test_get_settings_page(student_user, site_course, make_course, set_userlimit):
    user, token = student_user
    make_course(3)
    pref = set_userlimit(user, 7)

    r = client.get(f"{URL}?courseid=3", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 200
    data = r.json()
    assert data["form"] == {"userid": user.id, "id": pref.id, "userlimit": 7, "courseid": 3, "choices": list(range(1, 11))}
    assert [n["text"] for n in data["navbar"]] == ["C3", "Recent Courses user settings"]
    assert data["navbar"][0]["url"] == "https://lms.test/course/view.php?id=3"
    assert data["title"] == "site: Block: Recent Courses: User settings"
    assert data["heading"] == "Test Site"


def test_get_settings_page_on_site_course_has_no_course_crumb(student_headers, site_course):
    r = client.get(f"{URL}?courseid=1", headers=student_headers)
    assert r.status_code == 200
    assert [n["text"] for n in r.json()["navbar"]] == ["Recent Courses user settings"]


def test_settings_requires_login(site_course):
    assert client.get(f"{URL}?courseid=1").status_code == 401
    assert client.post(f"{URL}?courseid=1", json={"userlimit": 3}).status_code == 401


def test_settings_invalid_course(student_headers):
    r = client.get(f"{URL}?courseid=999", headers=student_headers)
    assert r.status_code == 404
    assert r.json()["code"] == "invalidcourse"


def test_submit_inserts_then_updates_single_row(db_session, student_user, make_course):
    user, token = student_user
    make_course(2)
    headers = {"Authorization": f"Bearer {token}"}

    r = client.post(f"{URL}?courseid=2", json={"userlimit": 3}, headers=headers, follow_redirects=False)
    assert r.status_code == 303
    assert r.headers["location"] == "https://lms.test/course/view.php?id=2"
    assert _count(db_session, user.id) == 1

    r = client.post(f"{URL}?courseid=2", json={"userlimit": 9}, headers=headers, follow_redirects=False)
    assert r.status_code == 303
    assert _count(db_session, user.id) == 1
    row = db_session.query(UserPreference).filter(UserPreference.user_id == user.id).populate_existing().one()
    assert row.userlimit == 9


def test_submit_out_of_range_is_rejected_without_write(db_session, student_user, make_course):
    user, token = student_user
    make_course(2)
    headers = {"Authorization": f"Bearer {token}"}

    r = client.post(f"{URL}?courseid=2", json={"userlimit": 11}, headers=headers, follow_redirects=False)
    assert r.status_code == 422
    body = r.json()
    assert body["code"] == "validation_error"
    assert body["details"]["fields"] == {"userlimit": "The number cannot be greater than 10"}

    r = client.post(f"{URL}?courseid=2", json={"userlimit": 0}, headers=headers, follow_redirects=False)
    assert r.json()["details"]["fields"] == {"userlimit": "The number cannot be less than 1"}
    assert _count(db_session, user.id) == 0


def test_cancel_redirects_without_saving(db_session, student_user, make_course):
    user, token = student_user
    make_course(2)

    r = client.post(
        f"{URL}?courseid=2",
        json={"userlimit": 4, "cancel": True},
        headers={"Authorization": f"Bearer {token}"},
        follow_redirects=False,
    )
    assert r.status_code == 303
    assert r.headers["location"].endswith("/course/view.php?id=2")
    assert _count(db_session, user.id) == 0


def test_submissions_of_two_users_do_not_mix(db_session, student_user, other_user, make_course):
    user1, token1 = student_user
    user2, token2 = other_user
    make_course(2)

    client.post(f"{URL}?courseid=2", json={"userlimit": 2}, headers={"Authorization": f"Bearer {token1}"}, follow_redirects=False)
    client.post(f"{URL}?courseid=2", json={"userlimit": 8}, headers={"Authorization": f"Bearer {token2}"}, follow_redirects=False)

    limits = dict(db_session.query(UserPreference.user_id, UserPreference.userlimit).all())
    assert limits == {user1.id: 2, user2.id: 8}


def test_concurrent_first_saves_keep_last_value(db_session, student_user):
    user, _ = student_user
    first, second = SessionLocal(), SessionLocal()
    try:
        user_a = first.get(User, user.id)
        user_b = second.get(User, user.id)
        assert user_settings.load_form(first, user_a, 1).id == 0
        assert user_settings.load_form(second, user_b, 1).id == 0

        user_settings.submit(first, user_a, 3)
        user_settings.submit(second, user_b, 7)
    finally:
        first.close()
        second.close()

    rows = db_session.query(UserPreference.userlimit).filter(UserPreference.user_id == user.id).all()
    assert [tuple(r) for r in rows] == [(7,)]


def test_submit_updates_row_inserted_after_lookup(db_session, student_user, set_userlimit, monkeypatch):
    user, _ = student_user
    set_userlimit(user, 3)
    lookups = []
    real_get_preference = user_settings.get_preference

    def missing_on_first_lookup(db, user_id):
        lookups.append(user_id)
        return None if len(lookups) == 1 else real_get_preference(db, user_id)

    monkeypatch.setattr(user_settings, "get_preference", missing_on_first_lookup)

    record = user_settings.submit(db_session, user, 7)

    assert record.userlimit == 7
    assert len(lookups) == 2
    rows = db_session.query(UserPreference.userlimit).filter(UserPreference.user_id == user.id).all()
    assert [tuple(r) for r in rows] == [(7,)]
