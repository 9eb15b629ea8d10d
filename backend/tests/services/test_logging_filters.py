"""Tests for log redaction."""

from __future__ import annotations

import logging

from frontdesk.security.logging_filters import SensitiveFilter, redact


def test_redacts_tax_identifiers() -> None:
    assert redact("GSTIN 27AAPFU0939F1ZV") == "GSTIN 27***********ZV"
    assert redact("PAN AAPFU0939F on file") == "PAN ******939F on file"
    assert redact("aadhaar 2345 6789 0123") == "aadhaar XXXX XXXX 0123"


def test_redacts_bearer_tokens() -> None:
    assert redact("Authorization: Bearer abc.def-ghi") == "**REDACTED**"


def test_filter_rewrites_formatted_message() -> None:
    record = logging.LogRecord(
        "frontdesk", logging.INFO, __file__, 1, "customer pan=%s", ("AAPFU0939F",), None
    )
    assert SensitiveFilter().filter(record) is True
    assert record.getMessage() == "customer pan=******939F"


def test_filter_leaves_clean_records_alone() -> None:
    record = logging.LogRecord(
        "frontdesk", logging.INFO, __file__, 1, "invoice %s", ("INV-2026-0001",), None
    )
    SensitiveFilter().filter(record)
    assert record.msg == "invoice %s"
    assert record.args == ("INV-2026-0001",)
