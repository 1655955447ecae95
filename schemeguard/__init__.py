"""Security scheme validation for OpenAPI documents.

This package provides:
- Security scheme, OAuth flows and OAuth flow models with presets
- Per-kind validation of security schemes and their OAuth flows
- Cancellation contexts threaded through validation
- Document loading and whole-document validation reports
"""

from schemeguard.context import ValidationContext
from schemeguard.document import ValidationReport, validate_security_schemes
from schemeguard.errors import DocumentError, ErrorKind, ValidationCancelled, ValidationError
from schemeguard.loader import fetch_openapi_documentation, load_openapi_documentation
from schemeguard.models import (
    OAuthFlow,
    OAuthFlows,
    SecurityScheme,
    new_csrf_security_scheme,
    new_jwt_security_scheme,
)
from schemeguard.parser import parse_security_schemes
from schemeguard.validation import (
    validate_oauth_flow,
    validate_oauth_flows,
    validate_security_scheme,
)

__all__ = [
    # Models
    "SecurityScheme",
    "OAuthFlows",
    "OAuthFlow",
    "new_csrf_security_scheme",
    "new_jwt_security_scheme",
    # Validation
    "validate_security_scheme",
    "validate_oauth_flows",
    "validate_oauth_flow",
    "ValidationContext",
    # Errors
    "ErrorKind",
    "ValidationError",
    "ValidationCancelled",
    "DocumentError",
    # Documents
    "load_openapi_documentation",
    "fetch_openapi_documentation",
    "parse_security_schemes",
    "validate_security_schemes",
    "ValidationReport",
]
