"""Tests for the required / constraint / external-error executors."""

from __future__ import annotations

from form_validator.engine.strategies import (
    VALUE_STATE_PROPERTY,
    check_constraint,
    check_external_error,
    check_required,
)
from form_validator.models.profile import ValidatorProfile
from form_validator.models.state import ValueState
from form_validator.nodes import Binding, Control, Input, Label, MultiInput, Select

PROFILE = ValidatorProfile()


# -----------------------------------------------------------------------
# Required
# -----------------------------------------------------------------------


def test_required_empty_uses_fallback_message() -> None:
    node = Input("a", required=True)
    out = check_required(node, PROFILE)
    assert out.valid is False
    assert out.prop == "value"
    assert out.message == "Please fill this mandatory field!"
    assert node.value_state is ValueState.ERROR
    assert node.value_state_text == "Please fill this mandatory field!"


def test_required_empty_uses_placeholder() -> None:
    node = Input("a", required=True, placeholder="Enter your e-mail address")
    out = check_required(node, PROFILE)
    assert out.valid is False
    assert node.value_state_text == "Enter your e-mail address"


def test_required_filled_clears_state() -> None:
    node = Input("a", value="x", required=True, value_state=ValueState.ERROR, value_state_text="old")
    out = check_required(node, PROFILE)
    assert out.valid is True
    assert out.prop == "value"
    assert node.value_state is ValueState.NONE
    assert node.value_state_text == ""


def test_required_stops_at_first_non_empty_property() -> None:
    node = Control("a", properties={"value": "", "text": "shown"}, required=True)
    out = check_required(node, PROFILE)
    assert out.valid is True
    assert out.prop == "text"


def test_required_zero_is_a_value() -> None:
    node = Input("a", value=0, required=True)
    assert check_required(node, PROFILE).valid is True


def test_required_without_readable_property_is_skipped() -> None:
    node = Control("a", required=True)
    out = check_required(node, PROFILE)
    assert out.valid is True
    assert out.skipped is True
    assert node.value_state is ValueState.NONE


def test_multi_token_one_token_passes_despite_empty_value() -> None:
    node = MultiInput("m", tokens=["red"], value="", required=True)
    out = check_required(node, PROFILE)
    assert out.valid is True
    assert node.value_state is ValueState.NONE


def test_multi_token_zero_tokens_fails_despite_typed_text() -> None:
    node = MultiInput("m", tokens=[], value="typed but not accepted", required=True)
    out = check_required(node, PROFILE)
    assert out.valid is False
    assert out.prop == "tokens"
    assert node.value_state is ValueState.ERROR


def test_multi_token_several_tokens_pass() -> None:
    node = MultiInput("m", tokens=["a", "b"], required=True)
    assert check_required(node, PROFILE).valid is True


def test_picker_with_text_but_no_key_fails() -> None:
    node = Select("s", items=["NL", "BE"], value="Netherlands", selected_key="", required=True)
    out = check_required(node, PROFILE)
    assert out.valid is False
    assert out.prop == "selected_key"
    assert out.message == "Please choose an entry!"
    assert node.value_state_text == "Please choose an entry!"


def test_picker_with_key_passes() -> None:
    node = Select("s", items=["NL", "BE"], value="Netherlands", selected_key="NL", required=True)
    assert check_required(node, PROFILE).valid is True


def test_picker_nothing_selected_uses_required_message() -> None:
    node = Select("s", items=["NL", "BE"], required=True)
    out = check_required(node, PROFILE)
    assert out.valid is False
    assert out.prop == "value"
    assert out.message == PROFILE.required_message


# -----------------------------------------------------------------------
# Constraint
# -----------------------------------------------------------------------


def test_constraint_parse_failure(integer_type) -> None:
    node = Input("age", value="abc", bindings={"value": Binding("/age", integer_type)})
    out = check_constraint(node, "value", PROFILE)
    assert out.valid is False
    assert out.message == "'abc' is not a valid integer."
    assert node.value_state is ValueState.ERROR


def test_constraint_violation(integer_type) -> None:
    node = Input("age", value="200", bindings={"value": Binding("/age", integer_type)})
    out = check_constraint(node, "value", PROFILE)
    assert out.valid is False
    assert "at most 150" in out.message


def test_constraint_success_clears_stale_text(integer_type) -> None:
    node = Input(
        "age", value="42", bindings={"value": Binding("/age", integer_type)},
        value_state=ValueState.ERROR, value_state_text="stale",
    )
    out = check_constraint(node, "value", PROFILE)
    assert out.valid is True
    assert node.value_state is ValueState.NONE
    assert node.value_state_text == ""


def test_constraint_not_editable_is_skipped(integer_type) -> None:
    node = Input("age", value="abc", editable=False, bindings={"value": Binding("/age", integer_type)})
    out = check_constraint(node, "value", PROFILE)
    assert out.valid is True
    assert out.skipped is True
    assert integer_type.parsed == []
    assert node.value_state is ValueState.NONE


def test_constraint_editable_absent_defaults_to_true(integer_type) -> None:
    node = Input("age", value="7", bindings={"value": Binding("/age", integer_type)})
    check_constraint(node, "value", PROFILE)
    assert integer_type.parsed == ["7"]


def test_constraint_passes_internal_type() -> None:
    seen = {}

    class _Recording:
        def parse_value(self, value, internal_type=None):
            seen["internal_type"] = internal_type
            return value

        def validate_value(self, value):
            return None

    node = Input("a", value="x", bindings={"value": Binding("/a", _Recording(), internal_type="string")})
    assert check_constraint(node, "value", PROFILE).valid is True
    assert seen["internal_type"] == "string"


def test_constraint_empty_exception_text_uses_fallback() -> None:
    class _Silent:
        def parse_value(self, value, internal_type=None):
            raise ValueError()

        def validate_value(self, value):
            return None

    node = Input("a", value="x", bindings={"value": Binding("/a", _Silent())})
    out = check_constraint(node, "value", PROFILE)
    assert out.valid is False
    assert out.message == PROFILE.constraint_message


# -----------------------------------------------------------------------
# External error
# -----------------------------------------------------------------------


def test_external_error_keeps_state_and_text() -> None:
    node = Input("a", value_state=ValueState.ERROR, value_state_text="Already taken")
    out = check_external_error(node, PROFILE)
    assert out.valid is False
    assert out.prop == VALUE_STATE_PROPERTY
    assert out.message == "Already taken"
    assert node.value_state is ValueState.ERROR
    assert node.value_state_text == "Already taken"


def test_external_error_without_text_uses_fallback() -> None:
    node = Label("l", value_state=ValueState.ERROR)
    assert check_external_error(node, PROFILE).message == "Wrong input"
