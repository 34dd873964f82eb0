"""Base class for pydantic-backed form models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, ValidationError


class FormModel(BaseModel):
    """Form payload validated on demand rather than at construction."""

    model_config = ConfigDict(validate_default=False, str_strip_whitespace=True)

    @classmethod
    def from_payload(cls, payload: dict) -> "FormModel":
        """Wrap raw request values without validating them."""

        return cls.model_construct(**payload)

    def validation_errors(self) -> dict[str, list[str]]:
        """Return validation errors for the current payload."""

        try:
            type(self).model_validate(self.model_dump(warnings=False))
        except ValidationError as exc:
            structured: dict[str, list[str]] = {}
            for error in exc.errors(include_url=False):
                loc = error.get("loc", ())
                key = loc[0] if loc else "__root__"
                message = error.get("msg", "Invalid value").removeprefix("Value error, ")
                structured.setdefault(str(key), []).append(message)
            return structured
        return {}

    def cleaned(self) -> "FormModel":
        """Validated copy with whitespace stripped and defaults applied."""

        return type(self).model_validate(self.model_dump(warnings=False))

    @staticmethod
    def first_error(errors: dict[str, list[str]]) -> str:
        for messages in errors.values():
            if messages:
                return messages[0]
        return "Invalid value"


__all__ = ["FormModel"]
