"""Typed destination records.

Each destination table gets a record model whose fields are optional and
aliased to the stored column names. Anything a row carries beyond those
fields lands in the ``extra`` bag instead of leaking into the payload.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import ClassVar, Self

from pydantic import BaseModel, ConfigDict, Field


def _stringify(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class DestinationRecord(BaseModel):
    model_config = ConfigDict(extra="ignore")

    TABLE_NAME: ClassVar[str] = ""
    NOTES_FIELD: ClassVar[str | None] = None

    extra: dict[str, str] = Field(default_factory=dict)

    @classmethod
    def column_names(cls) -> list[str]:
        return [
            info.alias or name
            for name, info in cls.model_fields.items()
            if name != "extra"
        ]

    @classmethod
    def from_row(cls, row: Mapping[str, object]) -> Self:
        known = set(cls.column_names())
        payload: dict[str, object] = {}
        extra: dict[str, str] = {}
        for key, value in row.items():
            if value is None:
                continue
            if key in known:
                payload[key] = _stringify(value)
            else:
                extra[str(key)] = _stringify(value)
        return cls.model_validate({**payload, "extra": extra})

    def to_storage_row(self) -> dict[str, object]:
        """Dump by column name, folding ``extra`` into the notes field.

        Tables without a notes field drop the extra bag; see
        ``dropped_keys``.
        """
        row: dict[str, object] = self.model_dump(
            by_alias=True, exclude_none=True, exclude={"extra"}
        )
        if self.extra and self.NOTES_FIELD is not None:
            lines = [f"{key}: {value}" for key, value in self.extra.items()]
            existing = row.get(self.NOTES_FIELD)
            if existing:
                lines.append(str(existing))
            row[self.NOTES_FIELD] = "\n".join(lines)
        return row

    @property
    def dropped_keys(self) -> list[str]:
        if self.NOTES_FIELD is not None:
            return []
        return list(self.extra)


class UserRecord(DestinationRecord):
    TABLE_NAME: ClassVar[str] = "пользователи"

    id: str | None = Field(default=None, alias="идентификатор")
    email: str | None = Field(default=None, alias="электронная_почта")
    first_name: str | None = Field(default=None, alias="имя")
    last_name: str | None = Field(default=None, alias="фамилия")
    phone: str | None = Field(default=None, alias="телефон")
    company: str | None = Field(default=None, alias="компания")
    position: str | None = Field(default=None, alias="должность")
    telegram: str | None = Field(default=None, alias="телеграмма")
    avatar_url: str | None = Field(default=None, alias="аватар_url")
    bio: str | None = Field(default=None, alias="био")
    referral_code: str | None = Field(default=None, alias="реферальный_код")
    created_at: str | None = Field(default=None, alias="создано_в")
    updated_at: str | None = Field(default=None, alias="обновлено_в")


class ContactRecord(DestinationRecord):
    TABLE_NAME: ClassVar[str] = "контакты"
    NOTES_FIELD: ClassVar[str | None] = "примечания"

    id: str | None = Field(default=None, alias="идентификатор")
    first_name: str | None = Field(default=None, alias="имя")
    last_name: str | None = Field(default=None, alias="фамилия")
    email: str | None = Field(default=None, alias="электронная_почта")
    phone: str | None = Field(default=None, alias="телефон")
    company: str | None = Field(default=None, alias="компания")
    position: str | None = Field(default=None, alias="должность")
    telegram: str | None = Field(default=None, alias="телеграмма")
    linkedin_url: str | None = Field(default=None, alias="linkedin_url")
    website: str | None = Field(default=None, alias="website")
    country: str | None = Field(default=None, alias="страна")
    rating: str | None = Field(default=None, alias="рейтинг")
    network: str | None = Field(default=None, alias="сеть")
    birthday: str | None = Field(default=None, alias="день_рождения")
    google_id: str | None = Field(default=None, alias="google_id")
    notes: str | None = Field(default=None, alias="примечания")
    created_at: str | None = Field(default=None, alias="создано_в")


_RECORD_TYPES: dict[str, type[DestinationRecord]] = {
    UserRecord.TABLE_NAME: UserRecord,
    ContactRecord.TABLE_NAME: ContactRecord,
}


def record_type_for(table_name: str) -> type[DestinationRecord] | None:
    return _RECORD_TYPES.get(table_name)
