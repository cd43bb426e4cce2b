"""Unit tests for the mandatory-fields validator and the validator runner."""

from app.schemas.v1.tracker import TrackedEntity
from app.validation.reporter import ValidationCode, ValidationErrorReporter
from app.validation.validators import (
    MandatoryFieldsValidator,
    TrackedEntityMandatoryFieldsValidator,
    Validator,
    run_validators,
    validate_all,
)


class RecordingValidator(Validator[TrackedEntity]):
    def __init__(self):
        self.seen: list[str] = []

    def validate(self, reporter, entity):
        self.seen.append(entity.uid)


def test_complete_entity_reports_nothing():
    reporter = ValidationErrorReporter()
    entity = TrackedEntity(tracked_entity="TE1", tracked_entity_type="nEenWmSyUEp", org_unit="OU1")

    TrackedEntityMandatoryFieldsValidator().validate(reporter, entity)

    assert not reporter.has_errors()


def test_one_error_per_blank_field():
    reporter = ValidationErrorReporter()
    entity = TrackedEntity(tracked_entity="TE1", tracked_entity_type="  ", org_unit=None)

    TrackedEntityMandatoryFieldsValidator().validate(reporter, entity)

    assert [issue.args for issue in reporter.errors] == [("trackedEntityType",), ("orgUnit",)]
    assert all(issue.code == ValidationCode.E1121 for issue in reporter.errors)
    assert all(issue.uid == "TE1" for issue in reporter.errors)
    assert reporter.errors[1].message == "Missing required tracked entity property: `orgUnit`."
    assert reporter.errors[0].entity_type == "TrackedEntity"


def test_mandatory_fields_validator_skips_on_error():
    assert MandatoryFieldsValidator({}).skip_on_error is True
    assert RecordingValidator().skip_on_error is False


def test_error_skips_remaining_validators_for_that_entity_only():
    reporter = ValidationErrorReporter()
    follow_up = RecordingValidator()
    validators = [TrackedEntityMandatoryFieldsValidator(), follow_up]
    broken = TrackedEntity(tracked_entity="TE1", tracked_entity_type=None, org_unit="OU1")
    valid = TrackedEntity(tracked_entity="TE2", tracked_entity_type="T1", org_unit="OU1")

    validate_all(reporter, [broken, valid], validators)

    assert follow_up.seen == ["TE2"]
    assert reporter.has_error_for("TE1", ValidationCode.E1121)
    assert not reporter.has_error_for("TE2")


def test_earlier_errors_do_not_trigger_skip():
    reporter = ValidationErrorReporter()
    entity = TrackedEntity(tracked_entity="TE1", tracked_entity_type="T1", org_unit="OU1")
    reporter.add_error(entity, ValidationCode.E1121, "somethingElse")
    follow_up = RecordingValidator()

    run_validators(reporter, entity, [TrackedEntityMandatoryFieldsValidator(), follow_up])

    assert follow_up.seen == ["TE1"]
    assert reporter.error_count_for("TE1") == 1
