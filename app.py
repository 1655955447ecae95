import logging

from flask import Flask, request

from schemeguard import (
    DocumentError,
    ValidationCancelled,
    fetch_openapi_documentation,
    new_csrf_security_scheme,
    new_jwt_security_scheme,
    validate_security_schemes,
)
from schemeguard.config import Settings

logger = logging.getLogger(__name__)

settings = Settings.load()

app = Flask(__name__)


@app.route("/presets")
def presets():
    """Return the built-in security scheme presets."""
    return {
        "csrf": new_csrf_security_scheme().to_dict(),
        "jwt": new_jwt_security_scheme().to_dict(),
    }


@app.route("/validate", methods=["POST"])
def validate():
    """Validate the security schemes of a posted OpenAPI document.

    The body is either the document itself or {"url": "..."} naming where
    to fetch it.
    """
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        return {"ok": False, "error": "Request body must be a JSON object"}, 400

    try:
        if set(payload) == {"url"}:
            api_documentation = fetch_openapi_documentation(
                str(payload["url"]), timeout=settings.fetch_timeout
            )
        else:
            api_documentation = payload
        report = validate_security_schemes(
            api_documentation,
            context=settings.new_context(),
            stop_on_first_error=settings.stop_on_first_error,
        )
    except (DocumentError, ValidationCancelled) as exc:
        logger.warning("Document rejected: %s", exc)
        return {"ok": False, "error": str(exc)}, 400

    return report.to_dict(), 200 if report.ok else 422


if __name__ == "__main__":
    app.run(debug=True)  # nosec B201 - debug mode only for local development
