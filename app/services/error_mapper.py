from __future__ import annotations

from typing import Any, Dict, List, Optional

from app.core.exceptions import NotFound, VendorError

RESULT_OK = "Ok"
# E00040: "The record cannot be found."
NOT_FOUND_CODES = frozenset({"E00040"})


def result_messages(result: Dict[str, Any]) -> List[Dict[str, Any]]:
    messages = result.get("messages") or {}
    entries = messages.get("message")
    if entries is None:
        return []
    if not isinstance(entries, list):
        entries = [entries]
    return [entry for entry in entries if isinstance(entry, dict)]


def first_code(result: Dict[str, Any]) -> Optional[str]:
    entries = result_messages(result)
    if entries and entries[0].get("code"):
        return str(entries[0]["code"])
    return None


def error_text(result: Dict[str, Any]) -> str:
    texts = [str(entry["text"]) for entry in result_messages(result) if entry.get("text")]
    return ", ".join(texts) or "Unknown error"


def is_ok(result: Dict[str, Any]) -> bool:
    return (result.get("messages") or {}).get("resultCode") == RESULT_OK


def map_result(result: Dict[str, Any], *, not_found_ok: bool = False) -> Optional[Dict[str, Any]]:
    """Return ``result`` when the processor reported Ok, raise otherwise.

    With ``not_found_ok`` a "record not found" answer yields ``None``; that is
    only used when probing for a profile by email before creating one.
    """
    if is_ok(result):
        return result

    code = first_code(result)
    message = error_text(result)
    if code in NOT_FOUND_CODES:
        if not_found_ok:
            return None
        raise NotFound(message, code=code)
    raise VendorError(message, code=code)
