"""Contenido del bloque Recent Courses."""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.models.course import SITE_COURSE_ID, Course
from app.models.user import User
from app.schemas.course_recent import BlockContent
from app.services.auth_service import get_current_user_optional
from app.services.contexts import find_course_context, find_system_context
from app.services.recent_courses import RecentCoursesQuery, get_recent_courses_query

router = APIRouter(prefix="/api/blocks/course_recent", tags=["course_recent"])


@router.get("", response_model=BlockContent)
def get_block_content(
    courseid: int = Query(SITE_COURSE_ID, description="Curso de la página donde se muestra el bloque"),
    db: Session = Depends(get_db),
    user: User | None = Depends(get_current_user_optional),
    query: RecentCoursesQuery = Depends(get_recent_courses_query),
):
    course = db.get(Course, courseid)
    block_context = find_course_context(db, course.id) if course else None
    if block_context is None:
        block_context = find_system_context(db)
    return query.render(user, block_context, page_course_id=courseid)
