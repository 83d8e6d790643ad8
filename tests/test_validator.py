from typing import Any

import pytest

from app.core.validation import (
    ConfigurationError,
    ValidatableEntity,
    ValidationOutcome,
    Validator,
    default_catalog,
    validate,
)
from app.schemas.construction_stage import ConstructionStageCreate, ConstructionStageUpdate


class Task(ValidatableEntity):
    title: Any = None
    name: Any = None
    status: Any = None
    color: Any = None
    startDate: Any = None
    endDate: Any = None

    def rules(self) -> dict[str, str]:
        return {"title": "required|max:5"}


class TaskWithMessages(Task):
    def messages(self) -> dict[str, str]:
        return {
            "max": ":attribute is longer than :parameter characters",
            "title.required": "Give the task a title",
        }


def test_unknown_rule_raises_before_any_field_is_evaluated():
    calls = []
    catalog = default_catalog.copy()
    catalog.register("spy", lambda value, _: calls.append(value) or True, message="spy")

    validator = Validator({"title": "x"}, catalog)
    with pytest.raises(ConfigurationError):
        validator.validate(Task(title="x"), {"title": "spy", "status": "bogus"})

    assert calls == []


def test_arity_mismatch_raises():
    with pytest.raises(ConfigurationError):
        Validator({}).validate(Task(title="x"), {"title": "max"})


def test_required_empty_value_reports_error():
    outcome = Validator({}).validate(Task(title=""), {"title": "required"})

    assert outcome.errors == {"title": ["The title field is required."]}
    assert outcome.validated == {}
    assert outcome.fails


def test_required_missing_value_reports_every_failing_rule():
    outcome = Validator({}).validate(Task(), {"startDate": "required|date|isISO8601"})

    assert outcome.errors == {
        "startDate": [
            "The startDate field is required.",
            "The startDate is not a valid date.",
            "The startDate does not match the isISO8601 format.",
        ]
    }


def test_absent_optional_field_appears_nowhere():
    outcome = Validator({}).validate(
        Task(title="hi"),
        {"title": "max:5", "color": "hex_color|max:7|in:red,blue", "endDate": "date|after:{startDate}"},
    )

    assert outcome.errors == {}
    assert outcome.validated == {"title": "hi"}


def test_any_failure_clears_validated():
    outcome = Validator({"title": "abc", "status": "BAD"}).validate(
        Task(title="abc", status="BAD"),
        {"title": "max:5", "status": "in:NEW,PLANNED"},
    )

    assert outcome.validated == {}
    assert outcome.errors == {"status": ["The selected status is invalid."]}


def test_failing_default_not_sent_by_client_is_ignored():
    outcome = Validator({"title": "abc"}).validate(
        Task(title="abc", status="BAD"),
        {"title": "max:5", "status": "in:NEW,PLANNED"},
    )

    assert outcome.errors == {}
    assert outcome.validated == {"title": "abc"}


def test_explicit_null_sent_by_client_is_validated():
    outcome = Validator({"color": None}).validate(Task(), {"color": "hex_color"})
    assert outcome.errors == {"color": ["The color is not valid hex color"]}


def test_after_placeholder_is_resolved_per_entity():
    rules = {"endDate": "date|after:{startDate}"}
    request = {"startDate": "2026-02-01T00:00:00Z", "endDate": "2026-02-10T00:00:00Z"}
    validator = Validator(request)

    early_start = Task(startDate="2026-02-01T00:00:00Z", endDate="2026-02-10T00:00:00Z")
    late_start = Task(startDate="2026-03-01T00:00:00Z", endDate="2026-02-10T00:00:00Z")

    assert validator.validate(early_start, rules).passes
    outcome = validator.validate(late_start, rules)
    assert outcome.errors == {"endDate": ["The endDate must be a date after 2026-03-01T00:00:00Z."]}


def test_validating_twice_gives_identical_outcomes():
    request = {"title": "hello world", "status": "NEW"}
    entity = Task(title="hello world", status="NEW")
    rules = {"title": "required|max:5", "status": "in:NEW,PLANNED"}
    validator = Validator(request)

    first = validator.validate(entity, rules)
    second = validator.validate(entity, rules)

    assert first == second
    assert first is not second


def test_patch_mode_reports_only_fields_sent():
    request = {"status": "BAD"}
    entity = Task(status="BAD")
    rules = {"name": "max:3", "status": "in:NEW,PLANNED"}

    outcome = Validator(request).validate(entity, rules, only_request_fields=True)

    assert outcome.errors == {"status": ["The selected status is invalid."]}
    assert outcome.validated == {}


def test_patch_mode_hides_required_failures_for_fields_not_sent():
    request = {"status": "NEW"}
    entity = Task(status="NEW")
    rules = {"name": "required", "status": "in:NEW,PLANNED"}

    full = Validator(request).validate(entity, rules)
    patch = Validator(request).validate(entity, rules, only_request_fields=True)

    assert full.errors == {"name": ["The name field is required."]}
    assert full.validated == {}
    assert patch.errors == {}
    assert patch.validated == {"status": "NEW"}


def test_patch_mode_keeps_defaults_when_nothing_failed():
    request = {"status": "PLANNED"}
    entity = Task(title="abc", status="PLANNED")
    rules = {"title": "max:5", "status": "in:NEW,PLANNED"}

    full = Validator(request).validate(entity, rules)
    patch = Validator(request).validate(entity, rules, only_request_fields=True)

    assert full.validated == {"title": "abc", "status": "PLANNED"}
    assert patch.validated == {"title": "abc", "status": "PLANNED"}


def test_patch_mode_drops_unsent_fields_when_an_unsent_field_failed():
    request = {"status": "NEW"}
    entity = Task(title="abc", status="NEW")
    rules = {"name": "required", "title": "max:5", "status": "in:NEW,PLANNED"}

    outcome = Validator(request).validate(entity, rules, only_request_fields=True)

    assert outcome.errors == {}
    assert outcome.validated == {"status": "NEW"}


def test_max_message_substitutes_attribute_and_parameter():
    outcome = Validator({"title": "hello world"}).validate(Task(title="hello world"))

    assert outcome.errors["title"] == ["The title must not be greater than 5."]


def test_in_rule_accepts_allowed_value():
    rules = {"status": "in:NEW,PLANNED,DELETED"}

    bad = Validator({"status": "ARCHIVED"}).validate(Task(status="ARCHIVED"), rules)
    good = Validator({"status": "PLANNED"}).validate(Task(status="PLANNED"), rules)

    assert bad.errors == {"status": ["The selected status is invalid."]}
    assert good.validated == {"status": "PLANNED"}


@pytest.mark.parametrize("color, passes", [("#abc", True), ("abcdef", True), ("#12345", False)])
def test_hex_color(color, passes):
    outcome = Validator({"color": color}).validate(Task(color=color), {"color": "hex_color"})
    assert outcome.passes is passes


def test_failures_accumulate_in_rule_order():
    outcome = Validator({"startDate": "banana"}).validate(
        Task(startDate="banana"), {"startDate": "date|isISO8601|max:3"}
    )

    assert outcome.errors == {
        "startDate": [
            "The startDate is not a valid date.",
            "The startDate does not match the isISO8601 format.",
            "The startDate must not be greater than 3.",
        ]
    }


def test_custom_messages_override_defaults():
    outcome = Validator({"title": "hello world", "name": ""}).validate(
        TaskWithMessages(title="hello world"),
        {"title": "required|max:5", "name": "required"},
    )

    assert outcome.errors == {
        "title": ["title is longer than 5 characters"],
        "name": ["The name field is required."],
    }


def test_field_specific_message_wins():
    outcome = Validator({}).validate(TaskWithMessages(title=None))
    assert outcome.errors == {"title": ["Give the task a title"]}


def test_plain_mapping_entities_are_supported():
    data = {"title": "abc", "endDate": "2026-01-01T00:00:00Z", "startDate": "2026-02-01T00:00:00Z"}

    outcome = validate(data, data, {"title": "required", "endDate": "after:{startDate}"})

    assert outcome.errors == {"endDate": ["The endDate must be a date after 2026-02-01T00:00:00Z."]}


def test_entity_rules_used_by_default():
    payload = {"name": "Foundations", "startDate": "2026-02-01T08:00:00Z", "status": "NEW"}

    outcome = Validator(payload).validate(ConstructionStageCreate.from_payload(payload))

    assert outcome.passes
    assert outcome.validated == payload


def test_update_rules_have_nothing_required():
    outcome = Validator({}).validate(ConstructionStageUpdate.from_payload({}))
    assert outcome == ValidationOutcome()


def test_request_data_is_read_only():
    validator = Validator({"title": "abc"})
    with pytest.raises(TypeError):
        validator.request_data["title"] = "changed"


def test_bad_length_parameter_raises_even_for_absent_field():
    with pytest.raises(ConfigurationError):
        Validator({}).validate(Task(), {"name": "max:abc"})


def test_in_rule_does_not_coerce_non_strings():
    rules = {"status": "in:1,True"}

    assert Validator({"status": 1}).validate(Task(status=1), rules).errors == {
        "status": ["The selected status is invalid."]
    }
    assert Validator({"status": True}).validate(Task(status=True), rules).fails
    assert Validator({"status": "1"}).validate(Task(status="1"), rules).passes
