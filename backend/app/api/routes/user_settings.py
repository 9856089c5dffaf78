"""Página de ajustes del usuario para el bloque Recent Courses."""
from fastapi import APIRouter, Depends, Query
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session

from app.core.config import get_settings
from app.core.database import get_db
from app.core.errors import raise_api_error
from app.core.strings import get_string
from app.models.course import SITE_COURSE_ID, Course
from app.models.user import User
from app.schemas.course_recent import NavbarItem, UserSettingsPage, UserSettingsSubmit
from app.services import user_settings
from app.services.auth_service import get_current_user
from app.services.recent_courses import course_url

router = APIRouter(prefix="/blocks/course_recent", tags=["course_recent"])


def _require_course(db: Session, course_id: int) -> Course:
    course = db.get(Course, course_id)
    if not course:
        raise_api_error(404, "invalidcourse", get_string("invalidcourse"), {"courseid": course_id})
    return course


def _course_redirect(course_id: int) -> RedirectResponse:
    wwwroot = get_settings().wwwroot.rstrip("/")
    return RedirectResponse(course_url(wwwroot, course_id), status_code=303)


@router.get("/usersettings", response_model=UserSettingsPage)
def get_user_settings(
    courseid: int = Query(...),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    course = _require_course(db, courseid)
    wwwroot = get_settings().wwwroot.rstrip("/")

    navbar: list[NavbarItem] = []
    if courseid != SITE_COURSE_ID:
        navbar.append(NavbarItem(text=course.shortname, url=course_url(wwwroot, courseid)))
    navbar.append(NavbarItem(text=get_string("breadcrumb")))

    site = db.get(Course, SITE_COURSE_ID)
    site_shortname = site.shortname if site else ""
    return UserSettingsPage(
        title=f"{site_shortname}: Block: {get_string('pluginname')}: {get_string('settings')}",
        heading=site.fullname if site else get_string("pluginname"),
        navbar=navbar,
        label=get_string("userlimit"),
        help=get_string("userlimit_help"),
        form=user_settings.load_form(db, user, courseid),
    )


@router.post("/usersettings")
def submit_user_settings(
    data: UserSettingsSubmit,
    courseid: int = Query(...),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    _require_course(db, courseid)
    if data.cancel:
        return _course_redirect(courseid)

    errors = user_settings.validate(data)
    if errors:
        raise_api_error(422, "validation_error", "Solicitud inválida", {"fields": errors})

    user_settings.submit(db, user, data.userlimit)
    return _course_redirect(courseid)
