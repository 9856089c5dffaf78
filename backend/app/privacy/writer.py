from typing import Any

from app.models.context import Context


class ContextWriter:
    def __init__(self, store: dict[int, dict[tuple[str, ...], Any]], context: Context):
        self._store = store
        self.context = context

    def export_data(self, subcontext: list[str], data: Any) -> "ContextWriter":
        self._store.setdefault(self.context.id, {})[tuple(subcontext)] = data
        return self


class ContentWriter:
    """Acumula en memoria los datos exportados, agrupados por contexto y subcontexto."""

    def __init__(self):
        self._store: dict[int, dict[tuple[str, ...], Any]] = {}

    def with_context(self, context: Context) -> ContextWriter:
        return ContextWriter(self._store, context)

    def get_data(self, context: Context, subcontext: list[str]) -> Any:
        return self._store.get(context.id, {}).get(tuple(subcontext))

    def has_any_data(self, context: Context, subcontext: list[str] | None = None) -> bool:
        exported = self._store.get(context.id, {})
        if subcontext is None:
            return bool(exported)
        prefix = tuple(subcontext)
        return any(key[: len(prefix)] == prefix for key in exported)

    def to_dict(self) -> list[dict]:
        return [
            {"context_id": context_id, "subcontext": list(sub), "data": data}
            for context_id, entries in self._store.items()
            for sub, data in entries.items()
        ]
