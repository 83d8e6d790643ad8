from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable

import dateutil.parser

from app.core.validation.exceptions import ConfigurationError

Predicate = Callable[[Any, "str | None"], bool]

ISO8601_RE = re.compile(
    r"[0-9]{4}-[0-9]{2}-[0-9]{2}T[0-9]{2}:[0-9]{2}:[0-9]{2}(Z|[+-][0-9]{2}:[0-9]{2})"
)
HEX_COLOR_RE = re.compile(r"#?([a-fA-F0-9]{3}|[a-fA-F0-9]{6})")


@dataclass(frozen=True)
class RuleDefinition:
    name: str
    predicate: Predicate
    message: str
    takes_parameter: bool
    parameter_type: Callable[[str], Any] | None = None

    def check(self, value: Any, parameter: str | None) -> bool:
        return bool(self.predicate(value, parameter))


class RuleCatalog:
    """
    Registry of named rules. Each entry carries the predicate, whether it
    takes a parameter, and the default message template (":attribute" and
    ":parameter" placeholders).
    """

    def __init__(self, definitions: dict[str, RuleDefinition] | None = None):
        self._definitions: dict[str, RuleDefinition] = dict(definitions or {})

    def register(
        self,
        name: str,
        predicate: Predicate,
        *,
        message: str,
        takes_parameter: bool = False,
        parameter_type: Callable[[str], Any] | None = None,
    ) -> RuleDefinition:
        definition = RuleDefinition(
            name=name,
            predicate=predicate,
            message=message,
            takes_parameter=takes_parameter,
            parameter_type=parameter_type,
        )
        self._definitions[name] = definition
        return definition

    def rule(
        self,
        name: str,
        *,
        message: str,
        takes_parameter: bool = False,
        parameter_type: Callable[[str], Any] | None = None,
    ):
        def decorator(fn: Predicate) -> Predicate:
            self.register(
                name,
                fn,
                message=message,
                takes_parameter=takes_parameter,
                parameter_type=parameter_type,
            )
            return fn

        return decorator

    def get(self, name: str) -> RuleDefinition:
        definition = self._definitions.get(name)
        if definition is None:
            raise ConfigurationError(f"Validation rule {name} doesn't exist.")
        return definition

    def ensure_arity(self, name: str, parameter: str | None) -> RuleDefinition:
        definition = self.get(name)
        has_parameter = parameter is not None
        if definition.takes_parameter != has_parameter:
            raise ConfigurationError(
                f"Validation rule {name} expected {int(definition.takes_parameter)} "
                f"arguments, {int(has_parameter)} provided."
            )
        if has_parameter and definition.parameter_type is not None and "{" not in parameter:
            # placeholder parameters are only known per entity
            try:
                definition.parameter_type(parameter.strip())
            except (TypeError, ValueError):
                raise ConfigurationError(
                    f"Validation rule {name} got an invalid parameter {parameter!r}."
                )
        return definition

    def message_for(self, name: str) -> str:
        return self.get(name).message

    def copy(self) -> RuleCatalog:
        return RuleCatalog(self._definitions)

    def __contains__(self, name: object) -> bool:
        return name in self._definitions

    def names(self) -> list[str]:
        return list(self._definitions)


def as_text(value: Any) -> str:
    # single coercion policy for every string rule
    if value is None:
        return ""
    return str(value)


def parse_timestamp(value: Any) -> float | None:
    """
    Lenient date parsing. Returns a POSIX timestamp, or None when the value
    is not a recognizable date. Naive values are read as UTC.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        text = as_text(value).strip()
        if not text:
            return None
        try:
            parsed = dateutil.parser.parse(text)
        except (ValueError, OverflowError, TypeError):
            return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.timestamp()


default_catalog = RuleCatalog()


@default_catalog.rule("required", message="The :attribute field is required.")
def required(value: Any, _: str | None) -> bool:
    if value is None:
        return False
    if isinstance(value, (str, bytes, list, tuple, dict, set)):
        return len(value) > 0
    return True


@default_catalog.rule(
    "max",
    message="The :attribute must not be greater than :parameter.",
    takes_parameter=True,
    parameter_type=int,
)
def max_length(value: Any, parameter: str | None) -> bool:
    return len(as_text(value)) <= _int_parameter(parameter)


@default_catalog.rule(
    "min",
    message="The :attribute must not be smaller than :parameter.",
    takes_parameter=True,
    parameter_type=int,
)
def min_length(value: Any, parameter: str | None) -> bool:
    return len(as_text(value)) >= _int_parameter(parameter)


@default_catalog.rule("date", message="The :attribute is not a valid date.")
def date(value: Any, _: str | None) -> bool:
    return parse_timestamp(value) is not None


@default_catalog.rule(
    "isISO8601", message="The :attribute does not match the isISO8601 format."
)
def is_iso8601(value: Any, _: str | None) -> bool:
    if value is None:
        return False
    return ISO8601_RE.fullmatch(as_text(value)) is not None


@default_catalog.rule(
    "after",
    message="The :attribute must be a date after :parameter.",
    takes_parameter=True,
)
def after(value: Any, parameter: str | None) -> bool:
    current = parse_timestamp(value)
    other = parse_timestamp(parameter)
    return current is not None and other is not None and current > other


@default_catalog.rule(
    "in", message="The selected :attribute is invalid.", takes_parameter=True
)
def one_of(value: Any, parameter: str | None) -> bool:
    # strings only: 1 does not match "in:1"
    if not isinstance(value, str):
        return False
    return value in as_text(parameter).split(",")


@default_catalog.rule("hex_color", message="The :attribute is not valid hex color")
def hex_color(value: Any, _: str | None) -> bool:
    if value is None:
        return False
    return HEX_COLOR_RE.fullmatch(as_text(value)) is not None


def _int_parameter(parameter: str | None) -> int:
    try:
        return int(as_text(parameter).strip())
    except ValueError:
        raise ConfigurationError(f"Expected an integer rule parameter, got {parameter!r}")
