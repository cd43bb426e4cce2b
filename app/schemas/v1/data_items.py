"""Data item schemas."""

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.v1.common import DimensionItemType, ValueType


class DataItem(BaseModel):
    """A normalised search result, built once per result row."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    display_name: str
    short_name: str
    display_short_name: str
    code: str | None = None
    program_id: str | None = None
    value_type: ValueType
    dimension_item_type: DimensionItemType


class Pager(BaseModel):
    page: int
    page_size: int
    total: int
    page_count: int


class DataItemPage(BaseModel):
    items: list[DataItem] = Field(default_factory=list)
    pager: Pager | None = None
