"""Validate all security schemes of an OpenAPI document."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union

from schemeguard.context import ValidationContext, check_context
from schemeguard.errors import DocumentError, ValidationError
from schemeguard.models import SecurityScheme
from schemeguard.parser import security_scheme_definitions

logger = logging.getLogger(__name__)

SchemeError = Union[ValidationError, DocumentError]


@dataclass
class ValidationReport:
    """Outcome of validating every security scheme in a document.

    Attributes:
        results: Scheme name mapped to None (valid) or the error that
            rejected it, in document order
    """

    results: Dict[str, Optional[SchemeError]] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return all(error is None for error in self.results.values())

    @property
    def errors(self) -> Dict[str, SchemeError]:
        return {name: error for name, error in self.results.items() if error is not None}

    def raise_for_errors(self) -> None:
        """Raise the first recorded error, if any."""
        for error in self.results.values():
            if error is not None:
                raise error

    def to_dict(self) -> Dict[str, Any]:
        schemes: Dict[str, Any] = {}
        for name, error in self.results.items():
            if error is None:
                schemes[name] = {"valid": True}
            elif isinstance(error, ValidationError):
                schemes[name] = {"valid": False, "error": error.to_dict()}
            else:
                schemes[name] = {"valid": False, "error": {"kind": "DocumentError", "message": str(error)}}
        return {"ok": self.ok, "schemes": schemes}


def validate_security_schemes(
    api_documentation: Dict[str, Any],
    context: Optional[ValidationContext] = None,
    stop_on_first_error: bool = False,
) -> ValidationReport:
    """Decode and validate each security scheme of an OpenAPI document.

    Args:
        api_documentation: Parsed OpenAPI document
        context: Optional cancellation context, checked before each scheme
        stop_on_first_error: Stop after the first rejected scheme

    Returns:
        ValidationReport with one entry per scheme visited

    Raises:
        DocumentError: If the document itself is malformed
        ValidationCancelled: If the context is cancelled or expired
    """
    report = ValidationReport()
    for name, scheme_data in security_scheme_definitions(api_documentation).items():
        check_context(context)
        try:
            SecurityScheme.from_dict(scheme_data).validate(context)
        except (ValidationError, DocumentError) as exc:
            logger.warning("Security scheme %s rejected: %s", name, exc)
            report.results[name] = exc
            if stop_on_first_error:
                break
        else:
            logger.debug("Security scheme %s is valid", name)
            report.results[name] = None
    return report
