"""Load API documents and detect their specification version."""

from pathlib import Path

import yaml


def load_document(file_path: Path) -> dict:
    """Read a YAML or JSON API document into a dict."""
    text = file_path.read_text(encoding="utf-8")
    try:
        doc = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ValueError(f"{file_path} is not valid YAML or JSON: {e}") from e
    if not isinstance(doc, dict):
        raise ValueError(f"{file_path} does not contain an API document")
    return doc


def detect_format(doc: dict) -> str:
    """Detect the specification version of a loaded API document.

    Returns: 'openapi' (3.x) or 'swagger' (2.0).
    """
    if str(doc.get("openapi", "")).startswith("3"):
        return "openapi"
    if str(doc.get("swagger", "")).startswith("2"):
        return "swagger"
    raise ValueError("Document is neither OpenAPI 3.x nor Swagger 2.0")
