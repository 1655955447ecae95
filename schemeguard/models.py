"""Security scheme dataclasses.

Models mirror the OpenAPI 3.x Security Scheme, OAuth Flows and OAuth Flow
objects. ``from_dict`` decodes an already-loaded mapping strictly: vendor
``x-`` keys are kept in ``extensions`` and any other unknown key is rejected.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Optional

from schemeguard.context import ValidationContext
from schemeguard.errors import DocumentError
from schemeguard.validation import validate_oauth_flow, validate_oauth_flows, validate_security_scheme

EXTENSION_PREFIX = "x-"


def _split_fields(
    data: Any, known: Iterable[str], entity: str
) -> tuple[Dict[str, Any], Dict[str, Any]]:
    """Split a mapping into known fields and vendor extensions."""
    if not isinstance(data, dict):
        raise DocumentError(f"{entity} must be a mapping, not {type(data).__name__}")
    known = set(known)
    fields: Dict[str, Any] = {}
    extensions: Dict[str, Any] = {}
    for key, value in data.items():
        if key in known:
            fields[key] = value
        elif isinstance(key, str) and key.startswith(EXTENSION_PREFIX):
            extensions[key] = value
        else:
            raise DocumentError(f"{entity} has unsupported field '{key}'")
    return fields, extensions


def _string(fields: Dict[str, Any], key: str, entity: str) -> str:
    value = fields.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise DocumentError(f"{entity} field '{key}' must be a string")
    return value


def _scopes(scopes: Dict[Any, Any], entity: str) -> Dict[str, str]:
    """Check scope names and descriptions; a null description reads as ""."""
    result: Dict[str, str] = {}
    for name, text in scopes.items():
        if not isinstance(name, str):
            raise DocumentError(f"{entity} scope name {name!r} must be a string")
        if text is None:
            text = ""
        elif not isinstance(text, str):
            raise DocumentError(f"{entity} scope '{name}' description must be a string")
        result[name] = text
    return result


@dataclass
class OAuthFlow:
    """A single OAuth 2.0 flow.

    Attributes:
        authorization_url: Authorization endpoint ("authorizationUrl")
        token_url: Token endpoint ("tokenUrl")
        refresh_url: Optional refresh endpoint ("refreshUrl")
        scopes: Scope names mapped to their descriptions
        extensions: Vendor "x-" fields
    """

    authorization_url: str = ""
    token_url: str = ""
    refresh_url: str = ""
    scopes: Dict[str, str] = field(default_factory=dict)
    extensions: Dict[str, Any] = field(default_factory=dict)

    def validate(self, context: Optional[ValidationContext] = None) -> None:
        validate_oauth_flow(self, context)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OAuthFlow":
        entity = "OAuth flow"
        fields, extensions = _split_fields(
            data, ("authorizationUrl", "tokenUrl", "refreshUrl", "scopes"), entity
        )
        scopes = fields.get("scopes")
        if scopes is None:
            scopes = {}
        if not isinstance(scopes, dict):
            raise DocumentError(f"{entity} field 'scopes' must be a mapping")
        return cls(
            authorization_url=_string(fields, "authorizationUrl", entity),
            token_url=_string(fields, "tokenUrl", entity),
            refresh_url=_string(fields, "refreshUrl", entity),
            scopes=_scopes(scopes, entity),
            extensions=extensions,
        )

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {}
        if self.authorization_url:
            result["authorizationUrl"] = self.authorization_url
        if self.token_url:
            result["tokenUrl"] = self.token_url
        if self.refresh_url:
            result["refreshUrl"] = self.refresh_url
        result["scopes"] = dict(self.scopes)
        result.update(self.extensions)
        return result


# Attribute name to OpenAPI field name, in validation order.
_FLOW_FIELDS = {
    "implicit": "implicit",
    "password": "password",
    "client_credentials": "clientCredentials",
    "authorization_code": "authorizationCode",
}


@dataclass
class OAuthFlows:
    """The set of OAuth 2.0 flows a scheme supports.

    Attributes:
        implicit: Implicit grant flow
        password: Resource owner password flow
        client_credentials: Client credentials flow ("clientCredentials")
        authorization_code: Authorization code flow ("authorizationCode")
        extensions: Vendor "x-" fields
    """

    implicit: Optional[OAuthFlow] = None
    password: Optional[OAuthFlow] = None
    client_credentials: Optional[OAuthFlow] = None
    authorization_code: Optional[OAuthFlow] = None
    extensions: Dict[str, Any] = field(default_factory=dict)

    def validate(self, context: Optional[ValidationContext] = None) -> None:
        validate_oauth_flows(self, context)

    @property
    def populated_slots(self) -> list[str]:
        """Return the OpenAPI names of the populated flow slots."""
        return [name for attr, name in _FLOW_FIELDS.items() if getattr(self, attr) is not None]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OAuthFlows":
        fields, extensions = _split_fields(data, _FLOW_FIELDS.values(), "OAuth flows")
        kwargs: Dict[str, Any] = {}
        for attr, key in _FLOW_FIELDS.items():
            if fields.get(key) is not None:
                kwargs[attr] = OAuthFlow.from_dict(fields[key])
        return cls(extensions=extensions, **kwargs)

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {}
        for attr, key in _FLOW_FIELDS.items():
            flow = getattr(self, attr)
            if flow is not None:
                result[key] = flow.to_dict()
        result.update(self.extensions)
        return result


_SCHEME_FIELDS = ("type", "description", "name", "in", "scheme", "bearerFormat", "flows", "flow")


@dataclass
class SecurityScheme:
    """OpenAPI security scheme.

    Every field starts empty; a loader fills them in and ``validate()``
    checks the combination against the rules for ``type``.

    Attributes:
        type: "apiKey", "http", "oauth2" or "openIdConnect"
        description: Free text, never validated
        name: Header or query parameter name for "apiKey"
        in_: Where an API key travels, "query" or "header" (OpenAPI "in")
        scheme: HTTP auth scheme, "bearer" or "basic"
        bearer_format: Bearer token format hint ("bearerFormat")
        flows: OAuth flows for "oauth2"
        extensions: Vendor "x-" fields
    """

    type: str = ""
    description: str = ""
    name: str = ""
    in_: str = ""
    scheme: str = ""
    bearer_format: str = ""
    flows: Optional[OAuthFlows] = None
    extensions: Dict[str, Any] = field(default_factory=dict)

    def validate(self, context: Optional[ValidationContext] = None) -> None:
        validate_security_scheme(self, context)

    def with_type(self, value: str) -> "SecurityScheme":
        self.type = value
        return self

    def with_description(self, value: str) -> "SecurityScheme":
        self.description = value
        return self

    def with_name(self, value: str) -> "SecurityScheme":
        self.name = value
        return self

    def with_in(self, value: str) -> "SecurityScheme":
        self.in_ = value
        return self

    def with_scheme(self, value: str) -> "SecurityScheme":
        self.scheme = value
        return self

    def with_bearer_format(self, value: str) -> "SecurityScheme":
        self.bearer_format = value
        return self

    def with_flows(self, value: Optional[OAuthFlows]) -> "SecurityScheme":
        self.flows = value
        return self

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SecurityScheme":
        """Decode a Security Scheme Object.

        Older documents spell the flows object "flow"; a mapping under that
        key is read as "flows". Swagger 2.x string values of "flow" are not
        supported, and a document may not set both keys.
        """
        entity = "Security scheme"
        fields, extensions = _split_fields(data, _SCHEME_FIELDS, entity)
        flows_data = fields.get("flows")
        legacy_flow = fields.get("flow")
        if legacy_flow is not None:
            if flows_data is not None:
                raise DocumentError(f"{entity} can't have both 'flows' and 'flow'")
            if not isinstance(legacy_flow, dict):
                raise DocumentError(f"{entity} field 'flow' must be a mapping of OAuth flows")
            flows_data = legacy_flow
        return cls(
            type=_string(fields, "type", entity),
            description=_string(fields, "description", entity),
            name=_string(fields, "name", entity),
            in_=_string(fields, "in", entity),
            scheme=_string(fields, "scheme", entity),
            bearer_format=_string(fields, "bearerFormat", entity),
            flows=OAuthFlows.from_dict(flows_data) if flows_data is not None else None,
            extensions=extensions,
        )

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {}
        for key, value in (
            ("type", self.type),
            ("description", self.description),
            ("name", self.name),
            ("in", self.in_),
            ("scheme", self.scheme),
            ("bearerFormat", self.bearer_format),
        ):
            if value:
                result[key] = value
        if self.flows is not None:
            result["flows"] = self.flows.to_dict()
        result.update(self.extensions)
        return result


def new_csrf_security_scheme() -> SecurityScheme:
    """API key sent in the X-XSRF-TOKEN header."""
    return SecurityScheme(type="apiKey", in_="header", name="X-XSRF-TOKEN")


def new_jwt_security_scheme() -> SecurityScheme:
    """HTTP bearer authentication with JWT tokens."""
    return SecurityScheme(type="http", scheme="bearer", bearer_format="JWT")
