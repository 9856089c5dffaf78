from dataclasses import dataclass, field


@dataclass
class DatabaseTable:
    name: str
    privacy_fields: dict[str, str]
    summary: str

    def to_dict(self) -> dict:
        return {"type": "database_table", "name": self.name, "fields": self.privacy_fields, "summary": self.summary}


@dataclass
class MetadataCollection:
    component: str
    items: list[DatabaseTable] = field(default_factory=list)

    def add_database_table(self, name: str, privacy_fields: dict[str, str], summary: str = "") -> "MetadataCollection":
        self.items.append(DatabaseTable(name=name, privacy_fields=privacy_fields, summary=summary))
        return self

    def to_dict(self) -> dict:
        return {"component": self.component, "items": [item.to_dict() for item in self.items]}
