"""Row decoding and projection into DataItem records."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any

from app.core.errors import RowMappingError
from app.schemas.v1.common import DimensionItemType, ValueType
from app.schemas.v1.data_items import DataItem

SPACE = " "


def trim_to_empty(value: str | None) -> str:
    return value.strip() if value else ""


def default_if_blank(value: str | None, default: str | None) -> str:
    """Trimmed value, or the trimmed default when the value is blank."""
    return trim_to_empty(value) or trim_to_empty(default)


@dataclass(frozen=True)
class ProgramAttributeRow:
    """Fixed column schema of the program attribute query."""

    program_uid: str
    program_name: str | None
    program_shortname: str | None
    uid: str
    name: str | None
    shortname: str | None
    code: str | None
    valuetype: str | None
    p_i18n_name: str | None
    i18n_name: str | None
    p_i18n_shortname: str | None
    i18n_shortname: str | None

    @classmethod
    def from_row(cls, row: Any) -> ProgramAttributeRow:
        """Decode a SQLAlchemy row (anything exposing ``_mapping``)."""
        mapping = row._mapping
        values = {}
        for column in fields(cls):
            if column.name not in mapping:
                raise RowMappingError(f"Missing column in result row: {column.name}", column.name)
            values[column.name] = mapping[column.name]
        return cls(**values)

    def value_type(self) -> ValueType:
        if self.valuetype is None:
            raise RowMappingError(
                "Value type is missing", "valuetype", details={"uid": self.uid}
            )
        try:
            return ValueType.from_string(self.valuetype)
        except ValueError as e:
            raise RowMappingError(
                f"Unmappable value type: {self.valuetype}",
                "valuetype",
                details={"uid": self.uid, "value": self.valuetype},
            ) from e

    def to_data_item(self) -> DataItem:
        name = trim_to_empty(self.program_name) + SPACE + trim_to_empty(self.name)
        display_name = (
            default_if_blank(self.p_i18n_name, self.program_name)
            + SPACE
            + default_if_blank(self.i18n_name, self.name)
        )
        short_name = trim_to_empty(self.program_shortname) + SPACE + trim_to_empty(self.shortname)
        display_short_name = (
            default_if_blank(self.p_i18n_shortname, self.program_shortname)
            + SPACE
            + default_if_blank(self.i18n_shortname, self.shortname)
        )
        return DataItem(
            id=f"{self.program_uid}.{self.uid}",
            name=name,
            display_name=display_name,
            short_name=short_name,
            display_short_name=display_short_name,
            code=self.code,
            program_id=self.program_uid,
            value_type=self.value_type(),
            dimension_item_type=DimensionItemType.PROGRAM_ATTRIBUTE,
        )


def map_program_attribute_row(row: Any) -> DataItem:
    return ProgramAttributeRow.from_row(row).to_data_item()
