"""Base interface for data item queries."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from app.persistence.query_builder import QueryFragment
from app.schemas.v1.common import DimensionItemType
from app.schemas.v1.data_items import DataItem
from app.schemas.v1.query_params import DataItemQueryParams


class DataItemQuery(ABC):
    """Composes the data and count statements for one kind of data item.

    Contract:
    - MUST hold no per-call state (one instance is shared by all callers)
    - MUST render build_count from the same filters as build_query
    - MUST map every row into a complete DataItem or raise
    """

    @property
    @abstractmethod
    def dimension_item_type(self) -> DimensionItemType: ...

    @abstractmethod
    def build_query(self, params: DataItemQueryParams) -> QueryFragment: ...

    @abstractmethod
    def build_count(self, params: DataItemQueryParams) -> QueryFragment: ...

    @abstractmethod
    def map_row(self, row: Any) -> DataItem: ...
