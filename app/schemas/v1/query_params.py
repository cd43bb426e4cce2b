"""Parameter bag for data item searches.

Values arrive as loosely typed strings (query-string style) and are converted
here. Blank strings are normalised to ``None`` so that no filter ever sees an
empty value.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from app.core.errors import ValidationError
from app.schemas.v1.common import OrderDirection, OrderField, RootJunction, ValueType


def _split_values(value: Any) -> list[Any]:
    if isinstance(value, str):
        return value.split(",")
    if isinstance(value, (list, tuple, set, frozenset)):
        return list(value)
    return [value]


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


class OrderSpec(BaseModel):
    """One ``field:direction`` ordering pair."""

    model_config = ConfigDict(frozen=True)

    field: OrderField
    direction: OrderDirection = OrderDirection.ASC

    @classmethod
    def parse(cls, raw: str) -> OrderSpec:
        """Parse ``"displayName:desc"``; the direction defaults to ascending."""
        field_name, _, direction = raw.strip().partition(":")
        return cls(
            field=OrderField(field_name.strip()),
            direction=OrderDirection(direction.strip().lower() or OrderDirection.ASC),
        )


class DataItemQueryParams(BaseModel):
    """Typed filter parameter bag."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
        extra="ignore",
    )

    locale: str | None = None
    # The singular "valueType" spelling is accepted too.
    value_types: tuple[ValueType, ...] | None = Field(
        default=None,
        validation_alias=AliasChoices("valueTypes", "valueType", "value_types"),
    )
    name: str | None = None
    display_name: str | None = None
    short_name: str | None = None
    display_short_name: str | None = None
    code: str | None = None
    program_id: str | None = None
    uid: tuple[str, ...] | None = None
    identifiable_token: str | None = None
    root_junction: RootJunction = RootJunction.AND
    order: tuple[OrderSpec, ...] = ()
    max_limit: int | None = Field(default=None, ge=1)
    offset: int | None = Field(default=None, ge=0)

    @field_validator(
        "locale",
        "name",
        "display_name",
        "short_name",
        "display_short_name",
        "code",
        "program_id",
        "identifiable_token",
        mode="before",
    )
    @classmethod
    def normalize_text(cls, v: Any) -> Any:
        return _blank_to_none(v)

    @field_validator("value_types", mode="before")
    @classmethod
    def parse_value_types(cls, v: Any) -> tuple[ValueType, ...] | None:
        if v is None:
            return None
        parsed: list[ValueType] = []
        for item in _split_values(v):
            if isinstance(item, ValueType):
                parsed.append(item)
                continue
            if not isinstance(item, str):
                raise ValueError(f"Unknown value type: {item!r}")
            item = _blank_to_none(item)
            if item is None:
                continue
            # Unknown names raise ValueError and surface as a validation failure.
            parsed.append(ValueType.from_string(item))
        return tuple(dict.fromkeys(parsed)) or None

    @field_validator("uid", mode="before")
    @classmethod
    def parse_uids(cls, v: Any) -> tuple[str, ...] | None:
        if v is None:
            return None
        uids = [_blank_to_none(item) for item in _split_values(v)]
        return tuple(dict.fromkeys(uid for uid in uids if uid)) or None

    @field_validator("root_junction", mode="before")
    @classmethod
    def parse_root_junction(cls, v: Any) -> Any:
        v = _blank_to_none(v)
        if v is None:
            return RootJunction.AND
        if isinstance(v, str):
            return RootJunction(v.upper())
        return v

    @field_validator("order", mode="before")
    @classmethod
    def parse_order(cls, v: Any) -> tuple[OrderSpec, ...]:
        if v is None:
            return ()
        specs: list[OrderSpec] = []
        for item in _split_values(v):
            if isinstance(item, OrderSpec):
                specs.append(item)
            elif isinstance(item, str):
                if item.strip():
                    specs.append(OrderSpec.parse(item))
            elif isinstance(item, Mapping):
                specs.append(OrderSpec.model_validate(item))
            else:
                raise ValueError(f"Unsupported order value: {item!r}")
        return tuple(specs)

    @property
    def has_locale(self) -> bool:
        return self.locale is not None

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> DataItemQueryParams:
        """Build the bag from raw request values, rejecting malformed ones."""
        try:
            return cls.model_validate(dict(raw))
        except PydanticValidationError as e:
            raise ValidationError(
                "Invalid data item query parameters",
                details={
                    "errors": [
                        {"loc": list(err["loc"]), "msg": err["msg"], "type": err["type"]}
                        for err in e.errors()
                    ]
                },
            ) from e
