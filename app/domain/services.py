# app/domain/services.py
from __future__ import annotations

import re
from typing import Any, Iterable

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

_FIELD_HINTS = {
    "from.email": "Invalid sender email - make sure it's verified in SendGrid",
    "personalizations.0.to": "Invalid recipient email address",
}


def is_valid_email(address: str) -> bool:
    """Loose shape check: something@something.tld, no whitespace."""
    return bool(_EMAIL_RE.match(address))


def describe_vendor_errors(errors: Iterable[dict[str, Any]] | None) -> list[str]:
    """
    Turn the vendor's error list into one human readable line per error.
    Known fields get a hint; anything else falls back to the vendor message.
    """
    lines: list[str] = []
    for err in errors or ():
        hint = _FIELD_HINTS.get(err.get("field") or "")
        lines.append(hint or str(err.get("message") or "unknown vendor error"))
    return lines
