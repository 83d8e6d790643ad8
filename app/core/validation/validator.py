from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping

from app.core.validation.rule_spec import FieldRuleSpec, ValidationRule, compile_rules
from app.core.validation.rules import RuleCatalog, default_catalog

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidationOutcome:
    validated: dict[str, Any] = field(default_factory=dict)
    errors: dict[str, list[str]] = field(default_factory=dict)

    @property
    def fails(self) -> bool:
        return len(self.errors) > 0

    @property
    def passes(self) -> bool:
        return not self.fails


def _read_field(entity: Any, name: str) -> Any:
    if isinstance(entity, Mapping):
        return entity.get(name)
    return getattr(entity, name, None)


def _sibling_values(entity: Any) -> Mapping[str, Any]:
    if isinstance(entity, Mapping):
        return entity
    field_values = getattr(entity, "field_values", None)
    if callable(field_values):
        return field_values()
    return vars(entity)


def _custom_messages(entity: Any) -> Mapping[str, str]:
    messages = getattr(entity, "messages", None)
    if callable(messages):
        return messages() or {}
    return {}


def format_message(template: str, attribute: str, parameter: str | None) -> str:
    return template.replace(":attribute", attribute).replace(":parameter", parameter or "")


class Validator:
    """
    Validates an entity against its field rules.

    The instance only holds the raw request payload (read-only) and the rule
    catalog; everything computed during validate() is local to the call.

        outcome = Validator(payload).validate(stage, only_request_fields=True)
        if outcome.fails:
            ...
    """

    def __init__(
        self,
        request_data: Mapping[str, Any] | None = None,
        catalog: RuleCatalog = default_catalog,
    ):
        self.request_data = MappingProxyType(dict(request_data or {}))
        self.catalog = catalog

    def request_contains(self, key: str) -> bool:
        return key in self.request_data

    def validate(
        self,
        entity: Any,
        rules: Mapping[str, str] | None = None,
        *,
        only_request_fields: bool = False,
    ) -> ValidationOutcome:
        if rules is None:
            rules = entity.rules()

        # unknown rules / bad arity abort before any field is looked at
        specs = compile_rules(rules, self.catalog)

        siblings = _sibling_values(entity)
        messages = _custom_messages(entity)
        validated: dict[str, Any] = {}
        errors: dict[str, list[str]] = {}

        for spec in specs:
            self._validate_field(
                spec.resolve(siblings),
                _read_field(entity, spec.field),
                messages,
                validated,
                errors,
            )

        raw_failed = bool(errors)
        if only_request_fields:
            errors = {k: v for k, v in errors.items() if self.request_contains(k)}

        if errors:
            validated = {}
        elif only_request_fields and raw_failed:
            # failures only on fields the client never sent
            validated = {k: v for k, v in validated.items() if self.request_contains(k)}

        if errors:
            logger.debug(
                "Validation of %s failed for fields: %s",
                type(entity).__name__,
                ", ".join(errors),
            )

        return ValidationOutcome(validated=validated, errors=errors)

    def _validate_field(
        self,
        spec: FieldRuleSpec,
        value: Any,
        messages: Mapping[str, str],
        validated: dict[str, Any],
        errors: dict[str, list[str]],
    ) -> None:
        is_required = spec.required
        in_request = self.request_contains(spec.field)

        if value is None and not is_required and not in_request:
            return

        for rule in spec.rules:
            definition = self.catalog.get(rule.name)
            if definition.check(value, rule.parameter):
                validated[spec.field] = value
            elif is_required or in_request:
                errors.setdefault(spec.field, []).append(
                    self._message(spec.field, rule, messages)
                )

    def _message(self, attribute: str, rule: ValidationRule, messages: Mapping[str, str]) -> str:
        template = (
            messages.get(f"{attribute}.{rule.name}")
            or messages.get(rule.name)
            or self.catalog.message_for(rule.name)
        )
        return format_message(template, attribute, rule.parameter)


def validate(
    entity: Any,
    request_data: Mapping[str, Any] | None = None,
    rules: Mapping[str, str] | None = None,
    *,
    only_request_fields: bool = False,
    catalog: RuleCatalog = default_catalog,
) -> ValidationOutcome:
    return Validator(request_data, catalog).validate(
        entity, rules, only_request_fields=only_request_fields
    )
