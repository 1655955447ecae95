"""Load OpenAPI documents from files or URLs."""

from __future__ import annotations

import json
import logging
from typing import Any, Dict

import requests
import yaml

from schemeguard.errors import DocumentError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10


def _check_mapping(document: Any, source: str) -> Dict[str, Any]:
    if not isinstance(document, dict):
        raise DocumentError(f"{source}: OpenAPI document must be a mapping")
    return document


def load_openapi_documentation(file_path: str) -> Dict[str, Any]:
    """Load an OpenAPI document from a JSON or YAML file.

    Args:
        file_path: Path ending in .json, .yaml or .yml

    Returns:
        The parsed document

    Raises:
        DocumentError: If the extension is unsupported or the file cannot be
            read or parsed
    """
    path = str(file_path)
    try:
        if path.endswith((".yaml", ".yml")):
            with open(path, "r", encoding="utf-8") as file:
                document = yaml.safe_load(file)
        elif path.endswith(".json"):
            with open(path, "r", encoding="utf-8") as file:
                document = json.load(file)
        else:
            raise DocumentError(f"{path}: unsupported file format")
    except (OSError, UnicodeDecodeError, json.JSONDecodeError, yaml.YAMLError) as exc:
        logger.error("Error loading OpenAPI documentation from %s: %s", path, exc)
        raise DocumentError(f"{path}: {exc}") from exc
    return _check_mapping(document, path)


def fetch_openapi_documentation(url: str, timeout: float = DEFAULT_TIMEOUT) -> Dict[str, Any]:
    """Fetch an OpenAPI document over HTTP.

    JSON is assumed when the content type or URL says so, YAML likewise;
    otherwise JSON is tried first and YAML second.

    Raises:
        DocumentError: If the request fails or the body cannot be parsed
    """
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
        content_type = response.headers.get("content-type", "")
        if "json" in content_type or url.endswith(".json"):
            document = json.loads(response.text)
        elif "yaml" in content_type or "yml" in content_type or url.endswith((".yaml", ".yml")):
            document = yaml.safe_load(response.text)
        else:
            try:
                document = json.loads(response.text)
            except json.JSONDecodeError:
                document = yaml.safe_load(response.text)
    except (requests.RequestException, json.JSONDecodeError, yaml.YAMLError) as exc:
        logger.error("Error fetching OpenAPI documentation from %s: %s", url, exc)
        raise DocumentError(f"{url}: {exc}") from exc
    return _check_mapping(document, url)
