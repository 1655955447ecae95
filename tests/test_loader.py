"""Tests for schemeguard.loader module."""

from unittest.mock import Mock, patch

import pytest
import requests

from schemeguard.errors import DocumentError
from schemeguard.loader import fetch_openapi_documentation, load_openapi_documentation


def test_load_openapi_json(tmp_path):
    data = {"openapi": "3.0.0", "info": {"title": "Example", "version": "1.0"}}
    file_path = tmp_path / "openapi.json"
    file_path.write_text('{"openapi": "3.0.0", "info": {"title": "Example", "version": "1.0"}}')

    loaded = load_openapi_documentation(str(file_path))

    assert loaded == data


def test_load_openapi_yaml(tmp_path):
    file_path = tmp_path / "openapi.yaml"
    file_path.write_text("openapi: 3.0.0\ninfo:\n  title: Example\n  version: 1.0\n")

    loaded = load_openapi_documentation(str(file_path))

    assert loaded["openapi"] == "3.0.0"
    assert loaded["info"]["title"] == "Example"


def test_load_openapi_yml_extension(tmp_path):
    """Test that .yml extension is also supported."""
    file_path = tmp_path / "openapi.yml"
    file_path.write_text("openapi: 3.0.0\ninfo:\n  title: YML Test\n")

    loaded = load_openapi_documentation(str(file_path))

    assert loaded["info"]["title"] == "YML Test"


def test_load_openapi_unsupported_format(tmp_path):
    file_path = tmp_path / "openapi.txt"
    file_path.write_text("openapi: 3.0.0")

    with pytest.raises(DocumentError, match="unsupported file format"):
        load_openapi_documentation(str(file_path))


def test_load_openapi_file_not_found():
    with pytest.raises(DocumentError):
        load_openapi_documentation("/nonexistent/path/openapi.json")


def test_load_openapi_invalid_json(tmp_path):
    file_path = tmp_path / "invalid.json"
    file_path.write_text("{invalid json content")

    with pytest.raises(DocumentError):
        load_openapi_documentation(str(file_path))


def test_load_openapi_invalid_yaml(tmp_path):
    file_path = tmp_path / "invalid.yaml"
    file_path.write_text("invalid: yaml: [unclosed")

    with pytest.raises(DocumentError):
        load_openapi_documentation(str(file_path))


def test_load_openapi_non_mapping(tmp_path):
    file_path = tmp_path / "list.yaml"
    file_path.write_text("- openapi\n- 3.0.0\n")

    with pytest.raises(DocumentError, match="must be a mapping"):
        load_openapi_documentation(str(file_path))


class TestFetchOpenAPIDocumentation:
    def _response(self, text, content_type=""):
        response = Mock()
        response.text = text
        response.headers = {"content-type": content_type}
        response.raise_for_status = Mock()
        return response

    def test_fetch_json(self):
        with patch("schemeguard.loader.requests.get") as mock_get:
            mock_get.return_value = self._response('{"openapi": "3.0.0"}', "application/json")

            document = fetch_openapi_documentation("https://api.example.com/openapi", timeout=5)

        assert document == {"openapi": "3.0.0"}
        mock_get.assert_called_once_with("https://api.example.com/openapi", timeout=5)

    def test_fetch_yaml_by_extension(self):
        with patch("schemeguard.loader.requests.get") as mock_get:
            mock_get.return_value = self._response("openapi: 3.0.0\n", "text/plain")

            document = fetch_openapi_documentation("https://api.example.com/openapi.yaml")

        assert document == {"openapi": "3.0.0"}

    def test_fetch_falls_back_to_yaml(self):
        with patch("schemeguard.loader.requests.get") as mock_get:
            mock_get.return_value = self._response("openapi: 3.0.0\n", "text/plain")

            document = fetch_openapi_documentation("https://api.example.com/api-docs")

        assert document == {"openapi": "3.0.0"}

    def test_fetch_request_error(self):
        with patch("schemeguard.loader.requests.get") as mock_get:
            mock_get.side_effect = requests.ConnectionError("refused")

            with pytest.raises(DocumentError, match="refused"):
                fetch_openapi_documentation("https://api.example.com/openapi.json")

    def test_fetch_http_error(self):
        with patch("schemeguard.loader.requests.get") as mock_get:
            response = self._response("", "application/json")
            response.raise_for_status.side_effect = requests.HTTPError("404 Not Found")
            mock_get.return_value = response

            with pytest.raises(DocumentError, match="404"):
                fetch_openapi_documentation("https://api.example.com/openapi.json")


@pytest.mark.parametrize("file_name", ["openapi.json", "openapi.yaml"])
def test_load_openapi_invalid_utf8(tmp_path, file_name):
    file_path = tmp_path / file_name
    file_path.write_bytes(b'{"openapi": "\xff\xfe"}')

    with pytest.raises(DocumentError):
        load_openapi_documentation(str(file_path))
