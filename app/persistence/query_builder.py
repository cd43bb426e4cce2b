"""Helpers for building safe, reusable SQL filter fragments.

Notes:
- Column names must be static/trusted (owned by application code), not user input.
- Values are always carried as bound parameters on the fragment, never interpolated.
- A filter whose parameter is absent renders the empty fragment.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from sqlalchemy import TextClause, bindparam, text

from app.schemas.v1.query_params import DataItemQueryParams


@dataclass(frozen=True)
class QueryFragment:
    """A possibly-empty piece of SQL together with the values it binds."""

    sql: str = ""
    params: Mapping[str, Any] = field(default_factory=dict)
    expanding: frozenset[str] = frozenset()

    def __bool__(self) -> bool:
        return bool(self.sql)

    def wrapped(self, prefix: str, suffix: str = "") -> QueryFragment:
        """Surround with literal SQL, keeping the empty fragment empty."""
        if not self:
            return self
        return QueryFragment(f"{prefix}{self.sql}{suffix}", self.params, self.expanding)

    def parenthesized(self) -> QueryFragment:
        return self.wrapped("(", ")")

    @classmethod
    def join(cls, fragments: Iterable[QueryFragment], separator: str) -> QueryFragment:
        """Join the non-empty fragments, merging their bindings."""
        present = [fragment for fragment in fragments if fragment]
        if not present:
            return EMPTY
        params: dict[str, Any] = {}
        expanding: set[str] = set()
        for fragment in present:
            params.update(fragment.params)
            expanding.update(fragment.expanding)
        return cls(
            separator.join(fragment.sql for fragment in present),
            params,
            frozenset(expanding),
        )

    def to_text(self) -> TextClause:
        """Build an executable SQLAlchemy clause; list values bind as expanding."""
        clause = text(self.sql)
        bound = [name for name in sorted(self.expanding) if name in self.params]
        if bound:
            clause = clause.bindparams(*(bindparam(name, expanding=True) for name in bound))
        return clause


EMPTY = QueryFragment()


class Fragment(ABC):
    """Anything that renders into a query fragment from the parameter bag.

    Contract:
    - MUST be a pure function of its configuration and the bag
    - MUST return EMPTY when its parameter is absent
    - MUST NOT interpolate parameter values into SQL text
    """

    @abstractmethod
    def render(self, params: DataItemQueryParams) -> QueryFragment: ...


def _like_pattern(value: str) -> str:
    """Contains-pattern matching the text literally; ``\\`` is the default LIKE escape."""
    escaped = value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


@dataclass(frozen=True)
class PatternFilter(Fragment):
    """Case-insensitive contains match over one or two concatenated columns."""

    param: str
    columns: tuple[str, ...]

    def render(self, params: DataItemQueryParams) -> QueryFragment:
        value = getattr(params, self.param)
        if value is None:
            return EMPTY
        if len(self.columns) == 1:
            expression = self.columns[0]
        else:
            expression = "(" + " || ' ' || ".join(self.columns) + ")"
        bind_name = _bind_name(self.param)
        return QueryFragment(
            f"{expression} ilike :{bind_name}",
            {bind_name: _like_pattern(value)},
        )


@dataclass(frozen=True)
class EqualsFilter(Fragment):
    param: str
    column: str

    def render(self, params: DataItemQueryParams) -> QueryFragment:
        value = getattr(params, self.param)
        if value is None:
            return EMPTY
        bind_name = _bind_name(self.param)
        return QueryFragment(f"{self.column} = :{bind_name}", {bind_name: value})


@dataclass(frozen=True)
class InFilter(Fragment):
    """Membership test against a list parameter, bound as an expanding list."""

    param: str
    column: str
    convert: Callable[[Any], Any] = str

    def render(self, params: DataItemQueryParams) -> QueryFragment:
        values = getattr(params, self.param)
        if not values:
            return EMPTY
        bind_name = _bind_name(self.param)
        return QueryFragment(
            f"{self.column} in :{bind_name}",
            {bind_name: [self.convert(value) for value in values]},
            frozenset({bind_name}),
        )


@dataclass(frozen=True)
class IdentifiableTokenFilter(Fragment):
    """Free-text search: every word must match the uid, code or a display name."""

    uid_column: str
    code_column: str
    display_name_column: str
    program_display_name_column: str | None = None

    def render(self, params: DataItemQueryParams) -> QueryFragment:
        if params.identifiable_token is None:
            return EMPTY
        words = params.identifiable_token.split()
        columns = [self.uid_column, self.code_column, self.display_name_column]
        if self.program_display_name_column:
            columns.append(self.program_display_name_column)

        per_word = []
        for index, word in enumerate(words):
            bind_name = f"identifiableToken{index}"
            per_word.append(
                QueryFragment(
                    "(" + " or ".join(f"{column} ilike :{bind_name}" for column in columns) + ")",
                    {bind_name: _like_pattern(word)},
                )
            )
        combined = QueryFragment.join(per_word, " and ")
        return combined.parenthesized() if len(per_word) > 1 else combined


def _bind_name(param: str) -> str:
    head, *rest = param.split("_")
    return head + "".join(part.title() for part in rest)


def name_filtering(*columns: str) -> PatternFilter:
    return PatternFilter("name", columns)


def display_name_filtering(*columns: str) -> PatternFilter:
    return PatternFilter("display_name", columns)


def short_name_filtering(*columns: str) -> PatternFilter:
    return PatternFilter("short_name", columns)


def display_short_name_filtering(*columns: str) -> PatternFilter:
    return PatternFilter("display_short_name", columns)


def code_filtering(column: str) -> EqualsFilter:
    return EqualsFilter("code", column)


def program_id_filtering(column: str) -> EqualsFilter:
    return EqualsFilter("program_id", column)


def uid_filtering(column: str) -> InFilter:
    return InFilter("uid", column)


def value_type_filtering(column: str) -> InFilter:
    return InFilter("value_types", column, convert=lambda value_type: value_type.value)


def identifiable_token_filtering(
    uid_column: str,
    code_column: str,
    display_name_column: str,
    program_display_name_column: str | None = None,
) -> IdentifiableTokenFilter:
    return IdentifiableTokenFilter(
        uid_column, code_column, display_name_column, program_display_name_column
    )
