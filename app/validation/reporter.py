"""Accumulating sink for validation errors."""

from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Protocol


class ValidationCode(StrEnum):
    E1121 = "E1121"


VALIDATION_MESSAGES: dict[ValidationCode, str] = {
    ValidationCode.E1121: "Missing required tracked entity property: `{0}`.",
}


class Identifiable(Protocol):
    @property
    def uid(self) -> str: ...


@dataclass(frozen=True)
class ValidationIssue:
    code: ValidationCode
    uid: str
    entity_type: str
    message: str
    args: tuple[Any, ...] = ()


class ValidationErrorReporter:
    """Collects issues instead of raising, so one run reports every problem."""

    def __init__(self) -> None:
        self.errors: list[ValidationIssue] = []

    def add_error(self, entity: Identifiable, code: ValidationCode, *args: Any) -> None:
        self.errors.append(
            ValidationIssue(
                code=code,
                uid=entity.uid,
                entity_type=type(entity).__name__,
                message=VALIDATION_MESSAGES[code].format(*args),
                args=args,
            )
        )

    def add_error_if(
        self,
        condition: Callable[[], bool],
        entity: Identifiable,
        code: ValidationCode,
        *args: Any,
    ) -> None:
        if condition():
            self.add_error(entity, code, *args)

    def has_errors(self) -> bool:
        return bool(self.errors)

    def error_count_for(self, uid: str) -> int:
        return sum(1 for issue in self.errors if issue.uid == uid)

    def has_error_for(self, uid: str, code: ValidationCode | None = None) -> bool:
        return any(
            issue.uid == uid and (code is None or issue.code == code) for issue in self.errors
        )
