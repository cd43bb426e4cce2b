"""Ordering and pagination clauses."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from app.persistence.query_builder import EMPTY, Fragment, QueryFragment
from app.schemas.v1.common import OrderField
from app.schemas.v1.query_params import DataItemQueryParams


@dataclass(frozen=True)
class Ordering(Fragment):
    """Maps each orderable field to its tie-broken column list."""

    columns: Mapping[OrderField, tuple[str, ...]]

    def render(self, params: DataItemQueryParams) -> QueryFragment:
        terms: list[str] = []
        for spec in params.order:
            for column in self.columns.get(spec.field, ()):
                term = f"{column} {spec.direction.value}"
                if term not in terms:
                    terms.append(term)
        if not terms:
            return EMPTY
        return QueryFragment(" order by " + ", ".join(terms))


@dataclass(frozen=True)
class Limit(Fragment):
    """Trailing limit/offset clause, bound rather than interpolated."""

    def render(self, params: DataItemQueryParams) -> QueryFragment:
        parts = []
        if params.max_limit is not None:
            parts.append(QueryFragment(" limit :maxLimit", {"maxLimit": params.max_limit}))
        if params.offset:
            parts.append(QueryFragment(" offset :offset", {"offset": params.offset}))
        return QueryFragment.join(parts, "")


def ordering(
    display_name_columns: str,
    name_columns: str,
    display_short_name_columns: str,
    short_name_columns: str,
) -> Ordering:
    """Build an ordering from comma-separated column lists per orderable field."""

    def split(columns: str) -> tuple[str, ...]:
        return tuple(column.strip() for column in columns.split(",") if column.strip())

    return Ordering(
        {
            OrderField.DISPLAY_NAME: split(display_name_columns),
            OrderField.NAME: split(name_columns),
            OrderField.DISPLAY_SHORT_NAME: split(display_short_name_columns),
            OrderField.SHORT_NAME: split(short_name_columns),
        }
    )
