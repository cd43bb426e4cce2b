"""Entity validators and the per-entity runner."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import Generic, TypeVar

import structlog

from app.schemas.v1.tracker import TrackedEntity
from app.validation.reporter import Identifiable, ValidationCode, ValidationErrorReporter

logger = structlog.get_logger(__name__)

T = TypeVar("T", bound=Identifiable)


class Validator(ABC, Generic[T]):
    @abstractmethod
    def validate(self, reporter: ValidationErrorReporter, entity: T) -> None: ...

    @property
    def skip_on_error(self) -> bool:
        """When True, an error reported here stops the remaining validators for the entity."""
        return False


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


class MandatoryFieldsValidator(Validator[T]):
    """Reports one error per blank required field, tagged with the field name."""

    def __init__(
        self,
        fields: Mapping[str, Callable[[T], str | None]],
        code: ValidationCode = ValidationCode.E1121,
    ):
        self.fields = dict(fields)
        self.code = code

    def validate(self, reporter: ValidationErrorReporter, entity: T) -> None:
        for field_name, accessor in self.fields.items():
            reporter.add_error_if(
                lambda accessor=accessor: _is_blank(accessor(entity)),
                entity,
                self.code,
                field_name,
            )

    @property
    def skip_on_error(self) -> bool:
        return True


class TrackedEntityMandatoryFieldsValidator(MandatoryFieldsValidator[TrackedEntity]):
    def __init__(self) -> None:
        super().__init__(
            {
                "trackedEntityType": lambda te: te.tracked_entity_type,
                "orgUnit": lambda te: te.org_unit,
            }
        )


def run_validators(
    reporter: ValidationErrorReporter,
    entity: T,
    validators: Sequence[Validator[T]],
) -> None:
    """Run validators in order for one entity.

    A short-circuiting validator that reported an error skips the remaining
    validators of this entity only; other entities are validated normally.
    """
    for validator in validators:
        before = reporter.error_count_for(entity.uid)
        validator.validate(reporter, entity)
        if validator.skip_on_error and reporter.error_count_for(entity.uid) > before:
            logger.debug(
                "Skipping remaining validators",
                uid=entity.uid,
                validator=type(validator).__name__,
            )
            return


def validate_all(
    reporter: ValidationErrorReporter,
    entities: Iterable[T],
    validators: Sequence[Validator[T]],
) -> ValidationErrorReporter:
    for entity in entities:
        run_validators(reporter, entity, validators)
    return reporter
