"""Validation error to user message mapping."""

from forest_reservation.core import messages
from forest_reservation.errors import validation_message


class TestValidationMessage:
    def test_missing_field(self) -> None:
        errors = [{"type": "missing", "loc": ("body", "name"), "msg": "Field required"}]
        assert validation_message(errors) == messages.MSG_REQUIRED_FIELDS_MISSING

    def test_known_field(self) -> None:
        errors = [{"type": "enum", "loc": ("body", "timeSlot"), "msg": "bad"}]
        assert validation_message(errors) == messages.MSG_INVALID_TIME_SLOT

    def test_path_parameter(self) -> None:
        errors = [{"type": "int_parsing", "loc": ("path", "month"), "msg": "bad"}]
        assert validation_message(errors) == messages.MSG_INVALID_YEAR_MONTH

    def test_other_field_names_the_field(self) -> None:
        errors = [{"type": "greater_than_equal", "loc": ("body", "participants"), "msg": "too small"}]
        message = validation_message(errors)
        assert message.startswith(messages.MSG_VALIDATION_FAILED)
        assert "participants" in message

    def test_no_errors(self) -> None:
        assert validation_message([]) == messages.MSG_VALIDATION_FAILED
