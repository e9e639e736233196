"""Logging helpers with redaction."""

import logging
import re
from collections.abc import Mapping
from typing import Any

_SENSITIVE_KEYS = re.compile(r"(token|secret|api[_-]?key|password|authorization|cookie)", re.IGNORECASE)

REDACTED = "***REDACTED***"


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def redact_headers(headers: Mapping[str, Any]) -> dict[str, Any]:
    """Copy of ``headers`` (or any binding map) with sensitive values masked."""
    return {key: REDACTED if _SENSITIVE_KEYS.search(key) else value for key, value in headers.items()}
