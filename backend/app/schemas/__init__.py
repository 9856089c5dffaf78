from app.schemas.auth import (
    LoginRequest,
    RegisterRequest,
    TokenResponse,
)
from app.schemas.course_recent import (
    BlockContent,
    BlockItem,
    BlockLink,
    NavbarItem,
    UserSettingsForm,
    UserSettingsPage,
    UserSettingsSubmit,
)
from app.schemas.privacy import (
    ApprovedContextsRequest,
    ApprovedUsersRequest,
)

__all__ = [
    "LoginRequest", "RegisterRequest", "TokenResponse",
    "BlockContent", "BlockItem", "BlockLink", "NavbarItem",
    "UserSettingsForm", "UserSettingsPage", "UserSettingsSubmit",
    "ApprovedContextsRequest", "ApprovedUsersRequest",
]
