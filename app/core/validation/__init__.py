from app.core.validation.entity import ValidatableEntity
from app.core.validation.exceptions import ConfigurationError
from app.core.validation.rule_spec import FieldRuleSpec, ValidationRule, resolve_placeholder
from app.core.validation.rules import RuleCatalog, RuleDefinition, default_catalog
from app.core.validation.validator import ValidationOutcome, Validator, validate

__all__ = [ "ConfigurationError", "FieldRuleSpec", "RuleCatalog",
           "RuleDefinition", "ValidatableEntity", "ValidationOutcome",
           "ValidationRule", "Validator", "default_catalog",
           "resolve_placeholder", "validate" ]
