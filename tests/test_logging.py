from __future__ import annotations

import json
import logging

from platesnap.core.logging import CORRELATION_ID_CTX, JsonLogFormatter, correlation_scope


def test_json_log_formatter_includes_context_and_extras() -> None:
    with correlation_scope("import-1"):
        record = logging.LogRecord(
            name="platesnap.importer",
            level=logging.WARNING,
            pathname=__file__,
            lineno=1,
            msg="Row %d failed",
            args=(2,),
            exc_info=None,
        )
        record.target = "blocks"
        record.row = 2
        record.error_code = "REFERENCE_NOT_FOUND"

        payload = json.loads(JsonLogFormatter().format(record))

    assert payload["message"] == "Row 2 failed"
    assert payload["level"] == "WARNING"
    assert payload["correlation_id"] == "import-1"
    assert payload["target"] == "blocks"
    assert payload["row"] == 2
    assert payload["error_code"] == "REFERENCE_NOT_FOUND"
    assert "username" not in payload


def test_correlation_scope_generates_and_restores_value() -> None:
    before = CORRELATION_ID_CTX.get()

    with correlation_scope() as value:
        assert len(value) == 32
        assert CORRELATION_ID_CTX.get() == value

    assert CORRELATION_ID_CTX.get() == before
