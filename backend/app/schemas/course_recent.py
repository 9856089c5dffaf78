"""Schemas del bloque Recent Courses y su página de ajustes."""

from pydantic import BaseModel, Field


class BlockItem(BaseModel):
    text: str
    url: str | None = None
    title: str | None = None
    css_class: str | None = None
    course_id: int | None = None


class BlockLink(BaseModel):
    text: str
    url: str


class BlockContent(BaseModel):
    title: str
    items: list[BlockItem] = Field(default_factory=list)
    footer: BlockLink | None = None


class UserSettingsForm(BaseModel):
    userid: int
    id: int = 0
    userlimit: int
    courseid: int
    choices: list[int] = Field(default_factory=lambda: list(range(1, 11)))


class UserSettingsSubmit(BaseModel):
    userlimit: int | None = None
    cancel: bool = False


class NavbarItem(BaseModel):
    text: str
    url: str | None = None


class UserSettingsPage(BaseModel):
    title: str
    heading: str
    navbar: list[NavbarItem]
    label: str
    help: str
    form: UserSettingsForm
