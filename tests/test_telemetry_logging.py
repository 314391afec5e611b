import logging

import pytest

from syllable_heuristics.core import ConfigurationError
from syllable_heuristics.utils import logging_config
from syllable_heuristics.utils.observability import get_logger
from syllable_heuristics.utils.telemetry import SyllableTrace, TraceLogger


class FakeClock:
    """Deterministic clock used to drive trace timers in tests."""

    def __init__(self, step: float = 0.25) -> None:
        self._current = 0.0
        self._step = step

    def __call__(self) -> float:
        value = self._current
        self._current += self._step
        return value


def test_syllable_trace_emits_logging_events(caplog):
    trace = SyllableTrace()
    trace.add_listener(TraceLogger())

    caplog.set_level(logging.DEBUG, logger="syllable_heuristics.utils.telemetry")

    trace.start("test-trace")
    with trace.timer("phase"):
        pass
    trace.increment("words", 2)
    trace.record_word({"word": "cat", "total": 1})

    messages = [record.message for record in caplog.records]
    assert any("Syllable trace trace_started: test-trace" in message for message in messages)
    assert any("Syllable trace timing: phase" in message for message in messages)
    assert any("Syllable trace counter: words" in message for message in messages)
    assert any("Syllable trace word: cat" in message for message in messages)


def test_trace_logger_is_silent_above_debug(caplog):
    trace = SyllableTrace(listeners=[TraceLogger()])

    caplog.set_level(logging.INFO, logger="syllable_heuristics.utils.telemetry")
    trace.record_word({"word": "cat"})

    assert not [record for record in caplog.records if "Syllable trace" in record.message]


def test_snapshot_reports_words_counters_and_timings():
    trace = SyllableTrace(time_fn=FakeClock())

    trace_id = trace.start("count")
    with trace.timer("analyze"):
        trace.record_word({"word": "cat", "total": 1})
    trace.increment("words")
    trace.increment("words", 2)

    snapshot = trace.snapshot()
    assert snapshot["trace_id"] == trace_id == 1
    assert snapshot["name"] == "count"
    assert snapshot["words"] == [{"word": "cat", "total": 1}]
    assert snapshot["counters"] == {"words": 3}
    assert snapshot["timings"] == {"analyze": [0.25]}


def test_start_resets_the_previous_trace():
    trace = SyllableTrace()
    trace.start("first")
    trace.record_word({"word": "cat"})

    assert trace.start("second") == 2
    assert trace.snapshot()["words"] == []


def test_word_events_are_bounded():
    trace = SyllableTrace(max_events=2)

    for word in ("one", "two", "three"):
        trace.record_word({"word": word})

    assert [event["word"] for event in trace.snapshot()["words"]] == ["two", "three"]


def test_failing_listener_is_logged_and_skipped(caplog):
    received = []

    def broken(event_type, payload):
        raise RuntimeError("boom")

    trace = SyllableTrace(listeners=[broken, lambda event, payload: received.append(event)])
    caplog.set_level(logging.ERROR, logger="syllable_heuristics.utils.telemetry")

    trace.increment("words")

    assert received == ["counter"]
    assert any("Trace listener failed" in record.message for record in caplog.records)


def test_removed_listener_stops_receiving_events():
    received = []

    def listener(event_type, payload):
        received.append(event_type)

    trace = SyllableTrace(listeners=[listener])
    trace.increment("words")
    trace.remove_listener(listener)
    trace.increment("words")

    assert received == ["counter"]


def test_structured_logger_appends_bound_context(caplog):
    logger = get_logger("syllable_heuristics.tests").bind(component="test")
    caplog.set_level(logging.INFO, logger="syllable_heuristics.tests")

    logger.info("Counted", context={"words": 2})

    assert caplog.records[-1].message == 'Counted | {"component": "test", "words": 2}'


@pytest.fixture
def restore_package_logger():
    package_logger = logging.getLogger("syllable_heuristics")
    previous_level = package_logger.level
    yield package_logger
    package_logger.setLevel(previous_level)


def test_configure_logging_reads_level_from_environment(monkeypatch, restore_package_logger):
    monkeypatch.setattr(logging_config, "_CONFIGURED", False)
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: None)
    monkeypatch.setenv("SYLLABLES_LOG_LEVEL", "warning")

    logging_config.configure_logging()

    assert restore_package_logger.level == logging.WARNING
    assert logging_config._CONFIGURED is True


def test_configure_logging_runs_once_unless_forced(monkeypatch, restore_package_logger):
    monkeypatch.setattr(logging_config, "_CONFIGURED", True)
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: None)

    restore_package_logger.setLevel(logging.INFO)

    logging_config.configure_logging("ERROR")
    assert restore_package_logger.level == logging.INFO

    logging_config.configure_logging("ERROR", force=True)
    assert restore_package_logger.level == logging.ERROR


def test_configure_logging_accepts_numeric_levels(monkeypatch, restore_package_logger):
    monkeypatch.setattr(logging_config, "_CONFIGURED", False)
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: None)

    returned = logging_config.configure_logging("10")

    assert returned is restore_package_logger
    assert restore_package_logger.level == logging.DEBUG


def test_configure_logging_rejects_unknown_level_names(monkeypatch, restore_package_logger):
    monkeypatch.setattr(logging_config, "_CONFIGURED", False)
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: None)
    monkeypatch.setenv("SYLLABLES_LOG_LEVEL", "chatty")

    with pytest.raises(ConfigurationError, match="chatty"):
        logging_config.configure_logging()

    assert logging_config._CONFIGURED is False
