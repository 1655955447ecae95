"""Validation rules for security schemes, OAuth flow collections and flows.

Validation is fail-fast: the first violated rule raises a ValidationError
and nothing after it is checked.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, Optional

from schemeguard.context import ValidationContext, check_context
from schemeguard.errors import ErrorKind, ValidationError

if TYPE_CHECKING:
    from schemeguard.models import OAuthFlow, OAuthFlows, SecurityScheme

logger = logging.getLogger(__name__)

API_KEY_LOCATIONS = ("query", "header")
BEARER_FORMATS = ("", "JWT")

# Slot order matters: the first populated slot is the one validated.
FLOW_SLOTS = (
    ("implicit", "implicit"),
    ("password", "password"),
    ("client_credentials", "clientCredentials"),
    ("authorization_code", "authorizationCode"),
)


@dataclass(frozen=True)
class ApplicableFields:
    """Fields that may carry a value for a given scheme kind.

    Attributes:
        location: "in" and "name" are applicable (and required)
        bearer_format: "bearerFormat" is applicable (optional)
        flows: "flows" is applicable (and required)
    """

    location: bool = False
    bearer_format: bool = False
    flows: bool = False


# "http" is resolved through _HTTP_SCHEME_RULES.
_KIND_RULES: Dict[str, ApplicableFields] = {
    # bearerFormat is accepted on apiKey schemes.
    "apiKey": ApplicableFields(location=True, bearer_format=True),
    "oauth2": ApplicableFields(flows=True),
}

_HTTP_SCHEME_RULES: Dict[str, ApplicableFields] = {
    "bearer": ApplicableFields(bearer_format=True),
    "basic": ApplicableFields(),
}

_UNSUPPORTED_KINDS = frozenset({"openIdConnect"})


def applicable_fields(scheme: SecurityScheme) -> ApplicableFields:
    """Resolve which optional fields a scheme may carry.

    Raises:
        ValidationError: If the kind is unknown, unsupported, or an "http"
            scheme names an unknown auth scheme.
    """
    kind = scheme.type
    if kind == "http":
        rules = _HTTP_SCHEME_RULES.get(scheme.scheme)
        if rules is None:
            raise ValidationError(
                ErrorKind.INVALID_SCHEME_VALUE,
                f"Security scheme of type 'http' has invalid 'scheme' value '{scheme.scheme}'",
                entity="SecurityScheme",
                field="scheme",
                value=scheme.scheme,
            )
        return rules
    if kind in _UNSUPPORTED_KINDS:
        raise ValidationError(
            ErrorKind.UNSUPPORTED_FEATURE,
            f"Support for security schemes with type '{kind}' has not been implemented",
            entity="SecurityScheme",
            field="type",
            value=kind,
        )
    rules = _KIND_RULES.get(kind)
    if rules is None:
        raise ValidationError(
            ErrorKind.INVALID_KIND,
            f"Security scheme 'type' can't be '{kind}'",
            entity="SecurityScheme",
            field="type",
            value=kind,
        )
    return rules


def _unexpected(scheme: SecurityScheme, field: str, value) -> ValidationError:
    return ValidationError(
        ErrorKind.UNEXPECTED_FIELD,
        f"Security scheme of type '{scheme.type}' can't have '{field}'",
        entity="SecurityScheme",
        field=field,
        value=value,
    )


def validate_security_scheme(
    scheme: SecurityScheme, context: Optional[ValidationContext] = None
) -> None:
    """Validate a security scheme against the rules for its kind.

    Args:
        scheme: The scheme to check
        context: Optional cancellation context

    Raises:
        ValidationError: On the first violated rule
        ValidationCancelled: If the context is cancelled or expired
    """
    check_context(context)
    rules = applicable_fields(scheme)

    if rules.location:
        if scheme.in_ not in API_KEY_LOCATIONS:
            raise ValidationError(
                ErrorKind.INVALID_FIELD_VALUE,
                "Security scheme of type 'apiKey' should have 'in'. "
                f"It can be 'query' or 'header', not '{scheme.in_}'",
                entity="SecurityScheme",
                field="in",
                value=scheme.in_,
            )
        if not scheme.name:
            raise ValidationError(
                ErrorKind.MISSING_FIELD,
                "Security scheme of type 'apiKey' should have 'name'",
                entity="SecurityScheme",
                field="name",
            )
    elif scheme.in_:
        raise _unexpected(scheme, "in", scheme.in_)
    elif scheme.name:
        raise _unexpected(scheme, "name", scheme.name)

    if rules.bearer_format:
        if scheme.bearer_format not in BEARER_FORMATS:
            raise ValidationError(
                ErrorKind.INVALID_FIELD_VALUE,
                f"Security scheme has unsupported 'bearerFormat' value '{scheme.bearer_format}'",
                entity="SecurityScheme",
                field="bearerFormat",
                value=scheme.bearer_format,
            )
    elif scheme.bearer_format:
        raise _unexpected(scheme, "bearerFormat", scheme.bearer_format)

    if rules.flows:
        if scheme.flows is None:
            raise ValidationError(
                ErrorKind.MISSING_FIELD,
                f"Security scheme of type '{scheme.type}' should have 'flows'",
                entity="SecurityScheme",
                field="flows",
            )
        try:
            validate_oauth_flows(scheme.flows, context)
        except ValidationError as exc:
            logger.debug("Rejected flows of %s security scheme: %s", scheme.type, exc)
            raise ValidationError(
                exc.kind,
                f"Security scheme 'flows' is invalid: {exc.message}",
                entity="SecurityScheme",
                field=f"flows.{exc.field}" if exc.field else "flows",
                value=exc.value,
                in_flow=True,
            ) from exc
    elif scheme.flows is not None:
        raise _unexpected(scheme, "flows", scheme.flows.to_dict())


def validate_oauth_flows(flows: OAuthFlows, context: Optional[ValidationContext] = None) -> None:
    """Validate the first populated flow slot.

    Slots are examined in the order implicit, password, clientCredentials,
    authorizationCode. Slots after the first populated one are not looked at,
    so a collection with several populated slots is not rejected for it.

    Raises:
        ValidationError: MissingFlow when no slot is populated, otherwise
            whatever the flow validation raises
    """
    check_context(context)
    for attribute, slot in FLOW_SLOTS:
        flow = getattr(flows, attribute)
        if flow is not None:
            logger.debug("Validating OAuth flow in slot %s", slot)
            validate_oauth_flow(flow, context)
            return
    raise ValidationError(
        ErrorKind.MISSING_FLOW,
        "No OAuth flow is defined",
        entity="OAuthFlows",
    )


def validate_oauth_flow(flow: OAuthFlow, context: Optional[ValidationContext] = None) -> None:
    """Check that a flow has both URLs and at least one scope.

    URLs are not checked for well-formedness; any non-empty string passes.
    """
    check_context(context)
    if not flow.authorization_url:
        raise ValidationError(
            ErrorKind.MISSING_FIELD,
            "An OAuth flow is missing 'authorizationUrl'",
            entity="OAuthFlow",
            field="authorizationUrl",
        )
    if not flow.token_url:
        raise ValidationError(
            ErrorKind.MISSING_FIELD,
            "An OAuth flow is missing 'tokenUrl'",
            entity="OAuthFlow",
            field="tokenUrl",
        )
    if not flow.scopes:
        raise ValidationError(
            ErrorKind.MISSING_FIELD,
            "An OAuth flow is missing 'scopes'",
            entity="OAuthFlow",
            field="scopes",
        )
