"""Format checks and normalizers for Indian business identifiers."""

from __future__ import annotations

import re
from typing import Final

GST_NUMBER_PATTERN: Final = re.compile(
    r"^[0-9]{2}[A-Z]{5}[0-9]{4}[A-Z][1-9A-Z]Z[0-9A-Z]$"
)
PAN_NUMBER_PATTERN: Final = re.compile(r"^[A-Z]{5}[0-9]{4}[A-Z]$")
AADHAAR_NUMBER_PATTERN: Final = re.compile(r"^\d{12}$")
INDIAN_PHONE_PATTERN: Final = re.compile(r"^(\+91|91)?[6-9]\d{9}$")
PINCODE_PATTERN: Final = re.compile(r"^\d{6}$")
EMAIL_PATTERN: Final = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

_PHONE_NOISE: Final = re.compile(r"[\s\-()]")


def normalize_gst_number(value: str) -> str:
    return re.sub(r"\s", "", value).upper()


def normalize_pan_number(value: str) -> str:
    return re.sub(r"\s", "", value).upper()


def sanitize_phone(value: str) -> str:
    return _PHONE_NOISE.sub("", value)


def is_valid_gst_number(value: str) -> bool:
    return bool(GST_NUMBER_PATTERN.match(normalize_gst_number(value)))


def is_valid_pan_number(value: str) -> bool:
    return bool(PAN_NUMBER_PATTERN.match(normalize_pan_number(value)))


def is_valid_aadhaar_number(value: str) -> bool:
    return bool(AADHAAR_NUMBER_PATTERN.match(re.sub(r"\s", "", value)))


def is_valid_indian_phone(value: str) -> bool:
    return bool(INDIAN_PHONE_PATTERN.match(sanitize_phone(value)))


def is_valid_pincode(value: str) -> bool:
    return bool(PINCODE_PATTERN.match(value.strip()))


def is_valid_email(value: str) -> bool:
    return bool(EMAIL_PATTERN.match(value.strip()))


def format_indian_phone(value: str) -> str:
    """Normalize to ``+91XXXXXXXXXX`` when the number is recognisably Indian."""

    cleaned = sanitize_phone(value)
    if cleaned.startswith("+91"):
        return cleaned
    if cleaned.startswith("91") and len(cleaned) == 12:
        return f"+{cleaned}"
    if len(cleaned) == 10:
        return f"+91{cleaned}"
    return value


def format_aadhaar_number(value: str) -> str:
    """Group a 12 digit Aadhaar number as ``1234 5678 9012``."""

    cleaned = re.sub(r"\s", "", value)
    if not AADHAAR_NUMBER_PATTERN.match(cleaned):
        return value
    return f"{cleaned[:4]} {cleaned[4:8]} {cleaned[8:]}"


def optional_gst_number(value: str | None) -> str | None:
    """Pydantic helper: blank to ``None``, otherwise normalized and checked."""

    if value is None or not value.strip():
        return None
    normalized = normalize_gst_number(value)
    if not GST_NUMBER_PATTERN.match(normalized):
        raise ValueError("Invalid GST number format")
    return normalized


def optional_pan_number(value: str | None) -> str | None:
    if value is None or not value.strip():
        return None
    normalized = normalize_pan_number(value)
    if not PAN_NUMBER_PATTERN.match(normalized):
        raise ValueError("Invalid PAN number format")
    return normalized


def optional_pincode(value: str | None) -> str | None:
    if value is None or not value.strip():
        return None
    if not is_valid_pincode(value):
        raise ValueError("Invalid PIN code")
    return value.strip()
