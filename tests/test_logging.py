from __future__ import annotations

import json

import structlog

from family_timeline.changelog import describe_entry
from family_timeline.logging import configure_logging
from family_timeline.models.changelog import AuditEntry


def test_logs_are_json_on_stderr(capsys) -> None:
    configure_logging("WARNING")
    structlog.get_logger("family_timeline").warning("probe", member_id=3)

    captured = capsys.readouterr()
    assert captured.out == ""
    record = json.loads(captured.err.strip())
    assert record["event"] == "probe"
    assert record["level"] == "warning"
    assert record["member_id"] == 3


def test_degraded_snapshot_is_logged(capsys) -> None:
    configure_logging("INFO")
    entry = AuditEntry(entity_type="Achievement", action="UPDATE", entity_id=9)
    describe_entry(entry)

    record = json.loads(capsys.readouterr().err.strip())
    assert record["event"] == "snapshot_degraded"
    assert record["entity_id"] == 9


def test_filtered_below_level(capsys) -> None:
    configure_logging("ERROR")
    structlog.get_logger("family_timeline").warning("probe")
    assert capsys.readouterr().err == ""
