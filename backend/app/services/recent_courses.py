"""Cursos vistos recientemente por un usuario y render del bloque.

El límite efectivo se corrige en silencio al rango [LOWER_LIMIT, UPPER_LIMIT];
el formulario de ajustes, en cambio, rechaza los valores fuera de rango
(ver ``app.services.user_settings``).
"""
import calendar
from dataclasses import dataclass
from datetime import UTC, datetime

from fastapi import Depends
from loguru import logger
from sqlalchemy import and_, func
from sqlalchemy.orm import Session

from app.core.config import get_settings
from app.core.database import get_db
from app.core.strings import get_string
from app.models.context import CONTEXT_COURSE, Context, RoleAssignment
from app.models.course import SITE_COURSE_ID, Course
from app.models.log import LogEntry
from app.models.user import User
from app.schemas.course_recent import BlockContent, BlockItem, BlockLink
from app.services.capabilities import (
    CAP_CHANGELIMIT,
    CAP_SHOWALL,
    CAP_VIEWPARTICIPANTS,
    CapabilityChecker,
    get_capability_checker,
)
from app.services.contexts import find_course_context
from app.services.preferences import get_userlimit

LOWER_LIMIT = 1
UPPER_LIMIT = 10
DEFAULT_MAX = 5
RESERVED_COURSE_IDS = (0, SITE_COURSE_ID)
WINDOW_MONTHS = 3


@dataclass(frozen=True)
class RecentCourse:
    course_id: int
    fullname: str
    shortname: str
    visible: bool
    guest: bool
    last_viewed: int


def clamp_limit(value: int) -> int:
    return max(LOWER_LIMIT, min(UPPER_LIMIT, int(value)))


def effective_limit(default_limit: int | None, userlimit: int | None) -> int:
    """El límite del usuario reemplaza al global salvo que esté vacío (None o 0)."""
    maximum = default_limit if default_limit is not None else DEFAULT_MAX
    if userlimit:
        maximum = userlimit
    return clamp_limit(maximum)


def months_ago(now: datetime, months: int) -> datetime:
    month_index = now.year * 12 + (now.month - 1) - months
    year, month0 = divmod(month_index, 12)
    month = month0 + 1
    day = min(now.day, calendar.monthrange(year, month)[1])
    return now.replace(year=year, month=month, day=day)


def course_url(wwwroot: str, course_id: int) -> str:
    return f"{wwwroot}/course/view.php?id={course_id}"


def settings_url(wwwroot: str, course_id: int) -> str:
    return f"{wwwroot}/blocks/course_recent/usersettings?courseid={course_id}"


class RecentCoursesQuery:
    def __init__(
        self,
        db: Session,
        can: CapabilityChecker,
        default_limit: int = DEFAULT_MAX,
        must_have_role: bool = False,
        wwwroot: str = "",
    ):
        self.db = db
        self.can = can
        self.default_limit = default_limit
        self.must_have_role = must_have_role
        self.wwwroot = wwwroot

    def _can(self, user: User, context: Context | None, capability: str) -> bool:
        # Sin contexto en la plataforma no hay capability que conceder
        return context is not None and self.can(user, context, capability)

    def fetch(self, user_id: int, limit: int, check_role: bool, now: datetime | None = None) -> list[RecentCourse]:
        """Cursos distintos vistos en los últimos 3 meses, del más reciente al más antiguo."""
        now = now or datetime.now(UTC)
        since = int(months_ago(now, WINDOW_MONTHS).timestamp())
        last_viewed = func.max(LogEntry.time_created).label("last_viewed")

        q = (
            self.db.query(
                LogEntry.course_id,
                Course.fullname,
                Course.shortname,
                Course.visible,
                Course.guest_access,
                last_viewed,
            )
            .join(Course, LogEntry.course_id == Course.id)
            .filter(
                LogEntry.user_id == user_id,
                LogEntry.context_level == CONTEXT_COURSE,
                LogEntry.target == "course",
                LogEntry.action == "viewed",
                LogEntry.time_created >= since,
                LogEntry.course_id.notin_(RESERVED_COURSE_IDS),
            )
        )
        if check_role:
            # El rol debe ser del mismo usuario cuyo historial se consulta
            q = q.join(
                Context,
                and_(Context.context_level == CONTEXT_COURSE, Context.instance_id == LogEntry.course_id),
            ).join(
                RoleAssignment,
                and_(RoleAssignment.context_id == Context.id, RoleAssignment.user_id == LogEntry.user_id),
            )

        rows = (
            q.group_by(LogEntry.course_id, Course.fullname, Course.shortname, Course.visible, Course.guest_access)
            .order_by(last_viewed.desc(), LogEntry.course_id.desc())
            .limit(limit)
            .all()
        )
        return [
            RecentCourse(
                course_id=r.course_id,
                fullname=r.fullname,
                shortname=r.shortname,
                visible=bool(r.visible),
                guest=bool(r.guest_access),
                last_viewed=r.last_viewed,
            )
            for r in rows
        ]

    def render(
        self,
        viewer: User | None,
        block_context: Context | None,
        page_course_id: int = SITE_COURSE_ID,
        now: datetime | None = None,
    ) -> BlockContent:
        content = BlockContent(title=get_string("course_recent"))
        if viewer is None or viewer.is_guest:
            return content

        if self._can(viewer, block_context, CAP_CHANGELIMIT):
            content.footer = BlockLink(text=get_string("settings"), url=settings_url(self.wwwroot, page_course_id))

        limit = effective_limit(self.default_limit, get_userlimit(self.db, viewer.id))
        check_role = self.must_have_role and not self._can(viewer, block_context, CAP_SHOWALL)

        records = self.fetch(viewer.id, limit, check_role, now=now)
        if not records:
            content.items.append(BlockItem(text=get_string("youhavenotentredanycourses")))
            return content

        for record in records:
            # Sin control de rol se exige viewparticipants: el usuario puede tener roles fuera del curso
            if check_role:
                show_course = True
            else:
                show_course = self._can(viewer, find_course_context(self.db, record.course_id), CAP_VIEWPARTICIPANTS)
            if not (show_course or record.guest):
                continue
            content.items.append(
                BlockItem(
                    text=record.fullname,
                    url=course_url(self.wwwroot, record.course_id),
                    title=record.shortname,
                    css_class="visible" if record.visible else "dimmed",
                    course_id=record.course_id,
                )
            )

        logger.debug(f"Recent courses para usuario {viewer.id}: {len(content.items)}/{len(records)} (limit={limit}, check_role={check_role})")
        return content


def get_recent_courses_query(
    db: Session = Depends(get_db),
    can: CapabilityChecker = Depends(get_capability_checker),
) -> RecentCoursesQuery:
    settings = get_settings()
    return RecentCoursesQuery(
        db,
        can,
        default_limit=settings.course_recent_default,
        must_have_role=settings.course_recent_musthaverole,
        wwwroot=settings.wwwroot.rstrip("/"),
    )
