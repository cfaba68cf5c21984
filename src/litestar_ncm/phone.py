"""Phone number normalization for NCM submissions."""

from __future__ import annotations

import re

COUNTRY_CODE = "977"
_STRIPPED_COUNTRY_CODES = ("977", "91")
_WHITESPACE = re.compile(r"\s+")
_NON_DIGITS = re.compile(r"\D")


def clean_phone_for_carrier(phone: str | int | None) -> str:
    """Reduce a phone number to the bare local digits NCM expects.

    ``"+977 9800000000"``, ``"09800000000"`` and ``"9800000000"`` all
    become ``"9800000000"``.
    """
    if phone is None or phone == "":
        return ""
    value = _WHITESPACE.sub("", str(phone).strip())
    value = value.removeprefix("+")
    for prefix in _STRIPPED_COUNTRY_CODES:
        if value.startswith(prefix):
            value = value[len(prefix) :]
            break
    value = value.lstrip("0")
    return _NON_DIGITS.sub("", value)


def format_phone_with_country_code(phone: str | None) -> str:
    """Format a number as ``+977`` followed by its last ten digits."""
    value = _WHITESPACE.sub("", phone or "").lstrip("0")
    value = value.removeprefix(f"+{COUNTRY_CODE}")
    return f"+{COUNTRY_CODE}{value[-10:]}"
