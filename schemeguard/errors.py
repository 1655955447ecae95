"""Error types raised while validating security schemes."""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional


class ErrorKind(str, Enum):
    """Category of a security scheme validation failure."""

    INVALID_KIND = "InvalidKind"
    INVALID_SCHEME_VALUE = "InvalidSchemeValue"
    INVALID_FIELD_VALUE = "InvalidFieldValue"
    MISSING_FIELD = "MissingField"
    UNEXPECTED_FIELD = "UnexpectedField"
    MISSING_FLOW = "MissingFlow"
    UNSUPPORTED_FEATURE = "UnsupportedFeature"


class ValidationError(Exception):
    """A security scheme, flow collection or flow broke a validation rule.

    Attributes:
        kind: Which rule category was violated
        message: Human-readable description of the failure
        entity: "SecurityScheme", "OAuthFlows" or "OAuthFlow"
        field: OpenAPI name of the offending field, if any
        value: The offending value, if any
        in_flow: True when the failure came from the nested flow validation
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        entity: str,
        field: Optional[str] = None,
        value: Any = None,
        in_flow: bool = False,
    ):
        self.kind = kind
        self.message = message
        self.entity = entity
        self.field = field
        self.value = value
        self.in_flow = in_flow
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert to a JSON-friendly dictionary."""
        return {
            "kind": self.kind.value,
            "message": self.message,
            "entity": self.entity,
            "field": self.field,
            "value": self.value,
            "in_flow": self.in_flow,
        }


class ValidationCancelled(Exception):
    """Validation was cancelled or ran past its deadline."""


class DocumentError(ValueError):
    """An OpenAPI document could not be loaded or decoded."""
