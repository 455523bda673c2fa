"""Tests for the validation engine.

Covers:
- fail-fast ordering across rules and parameters
- nullable short-circuit
- callback rules
- message resolution (custom, rule default, global default, aliases)
- configuration errors
- parameter sources (get_parameters / get_parametric_converter)
"""

import logging
from unittest.mock import MagicMock

import pytest

from paramguard import (
    ConfigurationError,
    InvalidRequestError,
    MessageCatalog,
    ValidationEngine,
    default_rules,
    validate_data_with_rules,
    validate_with_rules,
)
from paramguard.messages import DEFAULT_MESSAGES


@pytest.fixture
def engine():
    return ValidationEngine()


def failure_message(engine, data, rule_spec, **kwargs) -> str:
    """Run validation expecting a failure and return its message."""
    with pytest.raises(InvalidRequestError) as exc_info:
        engine.validate(data, rule_spec, **kwargs)
    return exc_info.value.message


# =============================================================================
# End-to-end scenarios
# =============================================================================


class TestScenarios:
    def test_invalid_email(self, engine):
        message = failure_message(engine, {"email": "not-an-email"}, {"email": {"email": True}})
        assert message == DEFAULT_MESSAGES["email"].replace(":parameter", "email")

    def test_amount_below_minimum(self, engine):
        message = failure_message(engine, {"amount": 5}, {"amount": {"min": 10}})
        assert message == "The amount parameter must be at least 10."

    def test_country_not_in_list(self, engine):
        message = failure_message(engine, {"country": "fr"}, {"country": {"in": "us,uk,de"}})
        assert message == (
            "The country parameter only accept one of the following values: us, uk and de."
        )

    def test_valid_data_returns_none(self, engine):
        result = engine.validate(
            {"amount": 25, "currency": "USD", "email": "john.doe@merchant.com"},
            {
                "amount": {"required": True, "numeric": True, "between": "1, 5000"},
                "currency": {"required": True, "in": ["USD", "EUR"]},
                "email": {"email": True},
            },
        )
        assert result is None

    def test_module_level_helper(self):
        with pytest.raises(InvalidRequestError):
            validate_data_with_rules({"amount": 5}, {"amount": {"min": 10}})

    def test_error_carries_field_and_rule(self, engine):
        with pytest.raises(InvalidRequestError) as exc_info:
            engine.validate({"amount": 5}, {"amount": {"min": 10}})
        assert exc_info.value.field == "amount"
        assert exc_info.value.rule == "min"
        assert str(exc_info.value) == exc_info.value.message


# =============================================================================
# Fail-fast
# =============================================================================


class TestFailFast:
    def test_first_failing_rule_wins(self, engine):
        message = failure_message(
            engine,
            {"amount": "abc"},
            {"amount": {"numeric": True, "min": 10}},
        )
        assert message == "The amount parameter must be a numeric."

    def test_rule_order_follows_declaration(self, engine):
        message = failure_message(
            engine,
            {"amount": "abc"},
            {"amount": {"min": 10, "numeric": True}},
        )
        assert message == "The amount parameter must be at least 10."

    def test_later_parameters_not_evaluated(self, engine):
        later = MagicMock()
        with pytest.raises(InvalidRequestError):
            engine.validate(
                {"a": None, "b": "x"},
                {"a": {"required": True}, "b": {"callback": later}},
            )
        later.assert_not_called()

    def test_later_rules_not_evaluated(self):
        spy = MagicMock(return_value=True)
        engine = ValidationEngine(rules=default_rules.extend({"spy": spy}))
        with pytest.raises(InvalidRequestError):
            engine.validate({"a": None}, {"a": {"required": True, "spy": True}})
        spy.assert_not_called()

    def test_unknown_rule_after_failure_is_not_reached(self, engine):
        with pytest.raises(InvalidRequestError):
            engine.validate({"a": None}, {"a": {"required": True, "bogus": True}})


# =============================================================================
# Nullable
# =============================================================================


class TestNullable:
    def test_missing_value_skips_rules(self, engine):
        engine.validate({}, {"age": {"nullable": True, "numeric": True}})

    def test_explicit_none_skips_rules(self, engine):
        engine.validate({"age": None}, {"age": {"nullable": True, "numeric": True}})

    def test_present_value_is_still_validated(self, engine):
        message = failure_message(engine, {"age": "x"}, {"age": {"nullable": True, "numeric": True}})
        assert message == "The age parameter must be a numeric."

    @pytest.mark.parametrize("value", ["", 0, False])
    def test_falsy_values_are_not_null(self, engine, value):
        with pytest.raises(InvalidRequestError):
            engine.validate({"age": value}, {"age": {"nullable": True, "min": 1}})

    def test_nullable_false_does_not_skip(self, engine):
        with pytest.raises(InvalidRequestError):
            engine.validate({}, {"age": {"nullable": False, "required": True}})

    def test_nullable_position_does_not_matter(self, engine):
        engine.validate({}, {"age": {"numeric": True, "nullable": True}})

    def test_skipped_field_does_not_stop_later_fields(self, engine):
        with pytest.raises(InvalidRequestError) as exc_info:
            engine.validate(
                {"name": "!"},
                {"age": {"nullable": True, "numeric": True}, "name": {"alpha": True}},
            )
        assert exc_info.value.field == "name"

    def test_nullable_skip_is_logged(self, engine, caplog):
        with caplog.at_level(logging.DEBUG, logger="paramguard.engine"):
            engine.validate({}, {"age": {"nullable": True, "numeric": True}})
        assert "Skipping nullable parameter 'age'" in caplog.text


# =============================================================================
# Callback
# =============================================================================


class TestCallback:
    def test_callback_receives_value_and_error_kind(self, engine):
        callback = MagicMock()
        engine.validate({"token": "abc"}, {"token": {"callback": callback}})
        callback.assert_called_once_with("abc", InvalidRequestError)

    def test_callback_receives_none_for_missing(self, engine):
        callback = MagicMock()
        engine.validate({}, {"token": {"callback": callback}})
        callback.assert_called_once_with(None, InvalidRequestError)

    def test_callback_can_signal_failure(self, engine):
        def must_be_even(value, error):
            if value % 2:
                raise error("The count parameter must be even.")

        engine.validate({"count": 4}, {"count": {"callback": must_be_even}})
        message = failure_message(engine, {"count": 3}, {"count": {"callback": must_be_even}})
        assert message == "The count parameter must be even."

    def test_callback_runs_in_rule_order(self, engine):
        calls = []
        engine.validate(
            {"x": "1"},
            {"x": {"numeric": True, "callback": lambda value, error: calls.append(value)}},
        )
        assert calls == ["1"]

    def test_callback_skipped_by_nullable(self, engine):
        callback = MagicMock()
        engine.validate({}, {"token": {"nullable": True, "callback": callback}})
        callback.assert_not_called()

    @pytest.mark.parametrize(
        "argument, description",
        [("not_a_function", "not_a_function"), (None, "null value"), (True, "(boolean) true"), (5, "5")],
    )
    def test_non_callable_is_configuration_error(self, engine, argument, description):
        with pytest.raises(ConfigurationError) as exc_info:
            engine.validate({"x": 1}, {"x": {"callback": argument}})
        assert f"You provided {description}." in str(exc_info.value)


# =============================================================================
# Messages
# =============================================================================


class TestMessages:
    def test_custom_message_takes_precedence(self, engine):
        message = failure_message(
            engine,
            {"amount": 5},
            {"amount": {"min": 10}},
            messages={"amount": {"min": "Pay at least :min for :parameter."}},
        )
        assert message == "Pay at least 10 for amount."

    def test_custom_message_for_other_rule_is_ignored(self, engine):
        message = failure_message(
            engine,
            {"amount": 5},
            {"amount": {"min": 10}},
            messages={"amount": {"max": "unused"}},
        )
        assert message == "The amount parameter must be at least 10."

    def test_empty_message_entry_falls_back_to_catalog(self, engine):
        message = failure_message(
            engine,
            {"amount": 5},
            {"amount": {"min": 10}},
            messages={"amount": None},
        )
        assert message == "The amount parameter must be at least 10."

    def test_rule_without_template_uses_default(self):
        engine = ValidationEngine(rules=default_rules.extend({"never": lambda value, arg: False}))
        message = failure_message(engine, {"x": 1}, {"x": {"never": True}})
        assert message == "The x parameter is invalid."

    def test_alias_replaces_parameter(self, engine):
        message = failure_message(
            engine,
            {"amount": 5},
            {"amount": {"min": 10}},
            aliases={"amount": "purchase amount"},
        )
        assert message == "The purchase amount parameter must be at least 10."

    def test_engine_default_aliases_are_merged(self):
        engine = ValidationEngine(aliases={"amount": "total", "currency": "money"})
        message = failure_message(
            engine, {"amount": 5}, {"amount": {"min": 10}}, aliases={"currency": "unit"}
        )
        assert message == "The total parameter must be at least 10."

        message = failure_message(
            engine, {"amount": 5}, {"amount": {"min": 10}}, aliases={"amount": "sum"}
        )
        assert message == "The sum parameter must be at least 10."

    def test_every_placeholder_occurrence_replaced(self, engine):
        message = failure_message(
            engine,
            {"size": 50},
            {"size": {"between": [10, 1]}},
            messages={"size": {"between": ":parameter :min..:max (:parameter, :min..:max)"}},
        )
        assert message == "size 1..10 (size, 1..10)"

    def test_between_length_message(self, engine):
        message = failure_message(engine, {"code": "a"}, {"code": {"between_length": "2,4"}})
        assert message == "The code parameter must be between 2 and 4 characters."

    def test_max_length_message(self, engine):
        message = failure_message(engine, {"code": "abcd"}, {"code": {"max_length": 3}})
        assert message == "The code parameter may not be greater than 3 characters."

    def test_two_item_list_message(self, engine):
        message = failure_message(engine, {"c": "x"}, {"c": {"in": ["a", "b"]}})
        assert message == "The c parameter only accept one of the following values: a, b."

    def test_custom_catalog(self):
        catalog = MessageCatalog().with_overrides({"min": ":parameter < :min"})
        engine = ValidationEngine(catalog=catalog)
        assert failure_message(engine, {"n": 1}, {"n": {"min": 2}}) == "n < 2"

    def test_format_message(self, engine):
        assert engine.format_message("amount", "max", 99) == (
            "The amount parameter may not be greater than 99."
        )


# =============================================================================
# Configuration errors
# =============================================================================


class TestConfigurationErrors:
    @pytest.mark.parametrize("value", [None, "", "anything", 5])
    def test_unknown_rule(self, engine, value):
        with pytest.raises(ConfigurationError) as exc_info:
            engine.validate({"x": value}, {"x": {"nonexistent_rule": True}})
        assert not isinstance(exc_info.value, InvalidRequestError)
        message = str(exc_info.value)
        assert "nonexistent_rule" in message
        assert "`x`" in message
        assert "RuleRegistry" in message

    def test_unknown_rule_is_logged(self, engine, caplog):
        with caplog.at_level(logging.ERROR, logger="paramguard.engine"):
            with pytest.raises(ConfigurationError):
                engine.validate({}, {"x": {"nonexistent_rule": True}})
        assert "nonexistent_rule" in caplog.text

    def test_engine_with_empty_registry(self):
        from paramguard.rules import RuleRegistry

        engine = ValidationEngine(rules=RuleRegistry())
        with pytest.raises(ConfigurationError):
            engine.validate({"x": 1}, {"x": {"required": True}})


# =============================================================================
# Parameter sources
# =============================================================================


class GatewayRequest:
    """Request object exposing a parameter bag."""

    def __init__(self, parameters):
        self._parameters = parameters

    def get_parameters(self):
        return self._parameters


class AliasedGatewayRequest(GatewayRequest):
    def get_parametric_converter(self):
        return {"amount": "transaction amount", "currency": "currency code"}


class TestParameterSources:
    def test_validate_source(self, engine):
        request = GatewayRequest({"amount": 5})
        with pytest.raises(InvalidRequestError) as exc_info:
            engine.validate_source(request, {"amount": {"min": 10}})
        assert exc_info.value.message == "The amount parameter must be at least 10."

    def test_source_aliases_are_used(self, engine):
        request = AliasedGatewayRequest({"amount": 5})
        with pytest.raises(InvalidRequestError) as exc_info:
            engine.validate_source(request, {"amount": {"min": 10}})
        assert exc_info.value.message == "The transaction amount parameter must be at least 10."

    def test_caller_aliases_override_source(self, engine):
        request = AliasedGatewayRequest({"amount": 5})
        with pytest.raises(InvalidRequestError) as exc_info:
            engine.validate_source(
                request, {"amount": {"min": 10}}, aliases={"amount": "total"}
            )
        assert exc_info.value.message == "The total parameter must be at least 10."

    def test_module_level_helper(self):
        request = AliasedGatewayRequest({"currency": "XYZ"})
        with pytest.raises(InvalidRequestError) as exc_info:
            validate_with_rules(request, {"currency": {"in": "USD,EUR,GBP"}})
        assert exc_info.value.message == (
            "The currency code parameter only accept one of the following values: USD, EUR and GBP."
        )

    def test_valid_source(self):
        validate_with_rules(GatewayRequest({"amount": "12.50"}), {"amount": {"numeric": True}})
