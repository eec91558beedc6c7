import json
import logging

import pytest

import observability.logger as logger_mod
import observability.tracing as tracing


class _ListHandler(logging.Handler):
    def __init__(self) -> None:
        super().__init__()
        self.messages = []

    def emit(self, record: logging.LogRecord) -> None:
        self.messages.append(record.getMessage())


def test_span_records_ok_outcome(monkeypatch):
    events = []
    monkeypatch.setattr(tracing, "log_event", lambda kind, stage, **fields: events.append((kind, stage, fields)))

    with tracing.span("interview.generate_questions", round=2):
        pass

    kind, stage, fields = events[0]
    assert kind == "span"
    assert stage == "interview.generate_questions"
    assert fields["outcome"] == "ok"
    assert fields["round"] == 2
    assert fields["ms"] >= 0


def test_span_records_error_and_reraises(monkeypatch):
    events = []
    monkeypatch.setattr(tracing, "log_event", lambda kind, stage, **fields: events.append(fields))

    with pytest.raises(RuntimeError):
        with tracing.span("interview.evaluate_answer"):
            raise RuntimeError("gateway down")

    assert events[0]["outcome"] == "error"


def test_human_format_lists_known_fields():
    line = logger_mod._format_human(
        {"stage": "interview.submit_round", "kind": "round_scored", "round": 2, "average": 6.8, "passed": False, "trace": "x"}
    )
    assert line == "stage=interview.submit_round kind=round_scored round=2 average=6.8 passed=False"


def test_log_event_emits_human_line():
    handler = _ListHandler()
    interview_logger = logging.getLogger("interview")
    interview_logger.addHandler(handler)
    try:
        logger_mod.log_event("answer_scored", "interview.evaluate_answer", score=7, verdict="ADEQUATE")
    finally:
        interview_logger.removeHandler(handler)
    assert "stage=interview.evaluate_answer kind=answer_scored score=7 verdict=ADEQUATE" in handler.messages


def test_file_logs_write_one_json_event_per_line(monkeypatch, tmp_path):
    log_file = tmp_path / "logs" / "events.jsonl"
    monkeypatch.setattr(logger_mod, "ENABLE_FILE_LOGS", True)
    monkeypatch.setattr(logger_mod, "LOG_FILE", str(log_file))
    monkeypatch.setattr(logger_mod._logger, "handlers", [])

    try:
        logger_mod.log_event("round_scored", "interview.submit_round", round=2, average=6.8, passed=False)
        logger_mod.log_event("report_ready", "interview.final_report", verdict="CONSIDER")
    finally:
        for handler in logger_mod._logger.handlers:
            handler.close()

    lines = log_file.read_text(encoding="utf-8").splitlines()
    events = [json.loads(line) for line in lines]
    assert [event["kind"] for event in events] == ["round_scored", "report_ready"]
    assert events[0]["average"] == 6.8
    assert events[0]["passed"] is False
    assert not any(line.startswith("[") for line in lines)
    assert sorted(path.name for path in log_file.parent.iterdir()) == ["events.jsonl"]
