"""Tests for schemeguard.parser module."""

import pytest

from schemeguard.errors import DocumentError
from schemeguard.models import SecurityScheme
from schemeguard.parser import parse_security_schemes, security_scheme_definitions


class TestParseSecuritySchemes:
    def test_parse_all_kinds(self):
        api_doc = {
            "openapi": "3.0.0",
            "components": {
                "securitySchemes": {
                    "ApiKeyAuth": {"type": "apiKey", "in": "header", "name": "X-API-Key"},
                    "BearerAuth": {"type": "http", "scheme": "bearer", "bearerFormat": "JWT"},
                    "OAuth2": {
                        "type": "oauth2",
                        "flows": {
                            "password": {
                                "authorizationUrl": "https://auth.example.com/authorize",
                                "tokenUrl": "https://auth.example.com/token",
                                "scopes": {"read": "Read access"},
                            }
                        },
                    },
                }
            },
        }

        schemes = parse_security_schemes(api_doc)

        assert list(schemes) == ["ApiKeyAuth", "BearerAuth", "OAuth2"]
        assert all(isinstance(scheme, SecurityScheme) for scheme in schemes.values())
        assert schemes["ApiKeyAuth"].name == "X-API-Key"
        assert schemes["BearerAuth"].bearer_format == "JWT"
        assert schemes["OAuth2"].flows.password.token_url == "https://auth.example.com/token"

    def test_no_components(self):
        assert parse_security_schemes({"openapi": "3.0.0"}) == {}

    def test_empty_security_schemes(self):
        assert parse_security_schemes({"components": {"securitySchemes": None}}) == {}

    def test_malformed_scheme_names_the_scheme(self):
        api_doc = {"components": {"securitySchemes": {"Broken": {"type": "apiKey", "in": 1}}}}

        with pytest.raises(DocumentError, match="Security scheme 'Broken'"):
            parse_security_schemes(api_doc)


class TestSecuritySchemeDefinitions:
    def test_swagger_v2_rejected(self):
        with pytest.raises(DocumentError, match="Swagger 2.x"):
            security_scheme_definitions({"swagger": "2.0", "securityDefinitions": {}})

    def test_document_must_be_mapping(self):
        with pytest.raises(DocumentError):
            security_scheme_definitions(["openapi"])

    def test_components_must_be_mapping(self):
        with pytest.raises(DocumentError, match="'components'"):
            security_scheme_definitions({"components": "none"})

    def test_security_schemes_must_be_mapping(self):
        with pytest.raises(DocumentError, match="securitySchemes"):
            security_scheme_definitions({"components": {"securitySchemes": ["apiKey"]}})
