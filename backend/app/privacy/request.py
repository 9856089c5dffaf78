"""Listas de contextos y usuarios que maneja el orquestador de privacidad."""
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from sqlalchemy.orm import Session

from app.models.context import Context
from app.models.user import User


def _load_contexts(db: Session, context_ids: Iterable[int]) -> list[Context]:
    ids = list(dict.fromkeys(context_ids))
    if not ids:
        return []
    found = {c.id: c for c in db.query(Context).filter(Context.id.in_(ids)).all()}
    return [found[i] for i in ids if i in found]


@dataclass
class ContextList:
    component: str = ""
    contexts: list[Context] = field(default_factory=list)

    def add_context(self, context: Context) -> None:
        if all(c.id != context.id for c in self.contexts):
            self.contexts.append(context)

    @property
    def context_ids(self) -> list[int]:
        return [c.id for c in self.contexts]

    def __iter__(self) -> Iterator[Context]:
        return iter(self.contexts)

    def __len__(self) -> int:
        return len(self.contexts)


@dataclass
class ApprovedContextList:
    user: User
    component: str
    contexts: list[Context] = field(default_factory=list)

    @classmethod
    def from_ids(cls, db: Session, user: User, component: str, context_ids: Iterable[int]) -> "ApprovedContextList":
        return cls(user=user, component=component, contexts=_load_contexts(db, context_ids))

    def __iter__(self) -> Iterator[Context]:
        return iter(self.contexts)

    def __len__(self) -> int:
        return len(self.contexts)


@dataclass
class UserList:
    context: Context
    component: str
    user_ids: list[int] = field(default_factory=list)

    def add_user(self, user_id: int) -> None:
        if user_id not in self.user_ids:
            self.user_ids.append(user_id)

    def __len__(self) -> int:
        return len(self.user_ids)


@dataclass
class ApprovedUserList:
    context: Context
    component: str
    user_ids: list[int] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.user_ids)
