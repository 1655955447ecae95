"""Extract security schemes from an OpenAPI document.

Only OpenAPI 3.x documents (components/securitySchemes) are supported.
"""

from __future__ import annotations

import logging
from typing import Any, Dict

from schemeguard.errors import DocumentError
from schemeguard.models import SecurityScheme

logger = logging.getLogger(__name__)


def security_scheme_definitions(api_documentation: Dict[str, Any]) -> Dict[str, Any]:
    """Return the raw security scheme definitions keyed by scheme name.

    Args:
        api_documentation: Parsed OpenAPI document

    Returns:
        The components/securitySchemes mapping, empty when absent

    Raises:
        DocumentError: If the document is not a mapping, is a Swagger 2.x
            document, or its components are malformed
    """
    if not isinstance(api_documentation, dict):
        raise DocumentError("OpenAPI document must be a mapping")

    if str(api_documentation.get("swagger", "")).startswith("2."):
        raise DocumentError("Swagger 2.x documents are not supported; convert to OpenAPI 3.x")

    components = api_documentation.get("components") or {}
    if not isinstance(components, dict):
        raise DocumentError("'components' must be a mapping")

    schemes = components.get("securitySchemes") or {}
    if not isinstance(schemes, dict):
        raise DocumentError("'components.securitySchemes' must be a mapping")
    return schemes


def parse_security_schemes(api_documentation: Dict[str, Any]) -> Dict[str, SecurityScheme]:
    """Decode every security scheme in an OpenAPI document.

    Args:
        api_documentation: Parsed OpenAPI document

    Returns:
        Dictionary mapping scheme names to SecurityScheme objects

    Raises:
        DocumentError: If the document or any scheme definition is malformed
    """
    result: Dict[str, SecurityScheme] = {}
    for name, scheme_data in security_scheme_definitions(api_documentation).items():
        try:
            result[name] = SecurityScheme.from_dict(scheme_data)
        except DocumentError as exc:
            logger.error("Error parsing security scheme %s: %s", name, exc)
            raise DocumentError(f"Security scheme '{name}': {exc}") from exc
    return result
