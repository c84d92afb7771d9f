from __future__ import annotations

import pytest

from app.core.exceptions import NotFound, VendorError
from app.services.error_mapper import error_text, first_code, map_result
from vendor_payloads import error_messages, ok_messages


def test_ok_result_is_returned():
    result = {"messages": ok_messages(), "token": "t"}
    assert map_result(result) is result


def test_single_message_object():
    result = {"messages": {"resultCode": "Error", "message": {"code": "E00003", "text": "Invalid subscription"}}}
    with pytest.raises(VendorError) as excinfo:
        map_result(result)
    assert excinfo.value.message == "Invalid subscription"
    assert excinfo.value.code == "E00003"
    assert not isinstance(excinfo.value, NotFound)


def test_message_texts_joined_with_commas():
    result = {
        "messages": error_messages(
            {"code": "E00027", "text": "The transaction was unsuccessful."},
            {"code": "E00001", "text": "An error occurred during processing."},
        )
    }
    with pytest.raises(VendorError) as excinfo:
        map_result(result)
    assert str(excinfo.value) == "The transaction was unsuccessful., An error occurred during processing."
    assert excinfo.value.code == "E00027"


def test_missing_text_reports_unknown_error():
    result = {"messages": {"resultCode": "Error"}}
    assert error_text(result) == "Unknown error"
    assert first_code(result) is None
    with pytest.raises(VendorError, match="Unknown error"):
        map_result(result)


def test_not_found_suppressed_only_when_allowed():
    result = {"messages": error_messages({"code": "E00040", "text": "The record cannot be found."})}
    assert map_result(result, not_found_ok=True) is None
    with pytest.raises(NotFound) as excinfo:
        map_result(result)
    assert excinfo.value.status_code == 404


def test_other_errors_raise_even_when_not_found_allowed():
    result = {"messages": error_messages({"code": "E00007", "text": "User authentication failed."})}
    with pytest.raises(VendorError, match="User authentication failed."):
        map_result(result, not_found_ok=True)
