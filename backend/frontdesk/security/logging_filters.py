"""Logging filters that scrub sensitive content."""

from __future__ import annotations

import logging
import re

_SENSITIVE_PATTERN = re.compile(
    r"(Authorization: Bearer\s+[\w\.-]+|password\"\s*:\s*\"[^\"]+\")",
    re.IGNORECASE,
)
# GSTIN embeds the PAN, so it is matched first.
_GSTIN_PATTERN = re.compile(r"\b\d{2}[A-Z]{5}\d{4}[A-Z][1-9A-Z]Z[0-9A-Z]\b")
_PAN_PATTERN = re.compile(r"\b[A-Z]{5}\d{4}[A-Z]\b")
_AADHAAR_PATTERN = re.compile(r"\b[2-9]\d{3}\s?\d{4}\s?\d{4}\b")


def redact(message: str) -> str:
    """Mask credentials and Indian tax identifiers in ``message``."""

    message = _SENSITIVE_PATTERN.sub("**REDACTED**", message)
    message = _GSTIN_PATTERN.sub(lambda m: m.group(0)[:2] + "*" * 11 + m.group(0)[-2:], message)
    message = _PAN_PATTERN.sub(lambda m: "*" * 6 + m.group(0)[-4:], message)
    return _AADHAAR_PATTERN.sub(lambda m: "XXXX XXXX " + m.group(0)[-4:], message)


class SensitiveFilter(logging.Filter):
    """Replace sensitive tokens in log messages with a redaction marker."""

    def filter(self, record: logging.LogRecord) -> bool:
        try:
            message = record.getMessage()
        except (TypeError, ValueError):
            return True
        cleaned = redact(message)
        if cleaned != message:
            record.msg = cleaned
            record.args = None
        return True


__all__ = ["SensitiveFilter", "redact"]
