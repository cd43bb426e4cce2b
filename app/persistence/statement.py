"""Typed statement model: an ordered list of clauses rendered by one renderer.

The count variant is produced by rendering the same clauses with pagination
switched off, so data and count queries always share their filtering.
"""

from __future__ import annotations

from dataclasses import dataclass

from app.persistence.junction import combine
from app.persistence.ordering import Limit, Ordering
from app.persistence.query_builder import Fragment, QueryFragment
from app.schemas.v1.query_params import DataItemQueryParams


@dataclass(frozen=True)
class MandatoryFilter:
    """Always AND'ed, regardless of the root junction."""

    fragment: Fragment


@dataclass(frozen=True)
class OptionalFilter:
    """Combined with its siblings using the root junction."""

    fragment: Fragment


Clause = MandatoryFilter | OptionalFilter | Ordering | Limit


@dataclass(frozen=True)
class Statement:
    source: Fragment
    clauses: tuple[Clause, ...]

    def where(self, params: DataItemQueryParams) -> QueryFragment:
        mandatory = [
            clause.fragment.render(params)
            for clause in self.clauses
            if isinstance(clause, MandatoryFilter)
        ]
        optional = combine(
            (
                clause.fragment.render(params)
                for clause in self.clauses
                if isinstance(clause, OptionalFilter)
            ),
            params.root_junction,
        )
        return QueryFragment.join([*mandatory, optional], " and ").wrapped(" where ")

    def render(self, params: DataItemQueryParams, paginate: bool = True) -> QueryFragment:
        trailing = [
            clause.render(params)
            for clause in self.clauses
            if isinstance(clause, Ordering) or (paginate and isinstance(clause, Limit))
        ]
        source = self.source.render(params)
        return QueryFragment.join([source, self.where(params), *trailing], "")

    def render_count(self, params: DataItemQueryParams) -> QueryFragment:
        return self.render(params, paginate=False).wrapped("select count(*) from (", ") as t2")
