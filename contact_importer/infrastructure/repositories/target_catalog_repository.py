"""Static catalog of destination tables."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import override

from ...application.ports.repositories import TargetCatalogPort
from ...domain.entities.schema import ColumnInfo, ColumnTypes, TableSchema
from ...domain.exceptions import UnknownTableError

USERS_SCHEMA = TableSchema(
    table_name="пользователи",
    columns=(
        ColumnInfo("идентификатор", ColumnTypes.UUID, nullable=False),
        ColumnInfo("электронная_почта", ColumnTypes.VARCHAR, nullable=False),
        ColumnInfo("имя", ColumnTypes.VARCHAR),
        ColumnInfo("фамилия", ColumnTypes.VARCHAR),
        ColumnInfo("телефон", ColumnTypes.VARCHAR),
        ColumnInfo("компания", ColumnTypes.VARCHAR),
        ColumnInfo("должность", ColumnTypes.VARCHAR),
        ColumnInfo("телеграмма", ColumnTypes.VARCHAR),
        ColumnInfo("аватар_url", ColumnTypes.TEXT),
        ColumnInfo("био", ColumnTypes.TEXT),
        ColumnInfo("создано_в", ColumnTypes.TIMESTAMPTZ, nullable=False),
        ColumnInfo("обновлено_в", ColumnTypes.TIMESTAMPTZ, nullable=False),
    ),
)

CONTACTS_SCHEMA = TableSchema(
    table_name="контакты",
    columns=(
        ColumnInfo("идентификатор", ColumnTypes.UUID, nullable=False),
        ColumnInfo("имя", ColumnTypes.VARCHAR),
        ColumnInfo("фамилия", ColumnTypes.VARCHAR),
        ColumnInfo("электронная_почта", ColumnTypes.VARCHAR),
        ColumnInfo("телефон", ColumnTypes.VARCHAR),
        ColumnInfo("компания", ColumnTypes.VARCHAR),
        ColumnInfo("должность", ColumnTypes.VARCHAR),
        ColumnInfo("телеграмма", ColumnTypes.VARCHAR),
        ColumnInfo("linkedin_url", ColumnTypes.TEXT),
        ColumnInfo("website", ColumnTypes.TEXT),
        ColumnInfo("страна", ColumnTypes.VARCHAR),
        ColumnInfo("рейтинг", ColumnTypes.INTEGER),
        ColumnInfo("сеть", ColumnTypes.VARCHAR),
        ColumnInfo("день_рождения", ColumnTypes.DATE),
        ColumnInfo("google_id", ColumnTypes.VARCHAR),
        ColumnInfo("примечания", ColumnTypes.TEXT),
        ColumnInfo("создано_в", ColumnTypes.TIMESTAMPTZ, nullable=False),
    ),
    overflow_field="примечания",
)

DEFAULT_SCHEMAS: Mapping[str, TableSchema] = MappingProxyType(
    {schema.table_name: schema for schema in (USERS_SCHEMA, CONTACTS_SCHEMA)}
)


class TargetCatalogRepository(TargetCatalogPort):
    pass

    def __init__(self, schemas: Mapping[str, TableSchema] | None = None) -> None:
        super().__init__()
        self._schemas = dict(DEFAULT_SCHEMAS if schemas is None else schemas)

    @override
    def list_tables(self) -> list[str]:
        return list(self._schemas)

    @override
    def get_schema(self, table: str) -> TableSchema:
        schema = self._schemas.get(table)
        if schema is None:
            raise UnknownTableError(table, self.list_tables())
        return schema

    def has_table(self, table: str) -> bool:
        return table in self._schemas
