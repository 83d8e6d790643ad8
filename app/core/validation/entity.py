from __future__ import annotations

from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict


class ValidatableEntity(BaseModel):
    """
    Base for request payloads that go through the Validator.

    Subclasses declare their fields (loosely typed, the rules do the checking)
    and return a field -> rule string mapping from rules(). messages() may
    override the default message per rule name, or per "field.rule".
    """

    model_config = ConfigDict(extra="ignore")

    def rules(self) -> dict[str, str]:
        """Field name -> rule string. Every subclass must override this."""
        raise NotImplementedError

    def messages(self) -> dict[str, str]:
        return {}

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any] | None):
        return cls.model_validate(dict(payload or {}))

    def field_values(self) -> dict[str, Any]:
        return {name: getattr(self, name, None) for name in type(self).model_fields}
