import pytest

from declsound import log
from declsound.log import LogCategory, LogEntry, LogLevel


@pytest.fixture(autouse=True)
def _reset_log():
    log.clear_log()
    log.set_log_callback(None)
    for category in LogCategory:
        log.set_minimum_level(category, LogLevel.DEBUG)
    yield
    log.clear_log()
    log.set_log_callback(None)


def test_message_printed_with_category_label(capsys):
    log.log_message("hello", LogCategory.ENTITY, LogLevel.INFO)
    assert capsys.readouterr().out == "[Log-Entity] hello\n"


def test_message_below_threshold_not_printed_but_buffered(capsys):
    log.set_minimum_level(LogCategory.PARSER, LogLevel.ERROR)
    log.log_message("quiet", LogCategory.PARSER, LogLevel.WARNING)
    assert capsys.readouterr().out == ""
    assert log.poll_log() == LogEntry("quiet", LogCategory.PARSER, LogLevel.WARNING)


def test_poll_is_fifo_and_empties():
    log.log_message("first", LogCategory.CLI, LogLevel.DEBUG)
    log.log_message("second", LogCategory.LEAF, LogLevel.ERROR)
    assert log.poll_log().message == "first"
    second = log.poll_log()
    assert second.category is LogCategory.LEAF
    assert second.level is LogLevel.ERROR
    assert log.poll_log() is None


def test_poll_truncates_to_max_length_minus_one():
    log.log_message("abcdef", LogCategory.GENERAL, LogLevel.INFO)
    entry = log.poll_log(4)
    assert entry.message == "abcdef"[:3]


def test_poll_rejects_non_positive_length():
    log.log_message("x", LogCategory.GENERAL, LogLevel.INFO)
    with pytest.raises(ValueError):
        log.poll_log(0)


def test_integer_category_and_level_accepted():
    log.log_message("ints", int(LogCategory.BEHAVIOR_LOADER), int(LogLevel.TRACE))
    entry = log.poll_log()
    assert entry.category is LogCategory.BEHAVIOR_LOADER
    assert entry.level is LogLevel.TRACE


def test_callback_receives_messages():
    seen = []
    log.set_log_callback(lambda c, lv, m: seen.append((c, lv, m)))
    log.log_message("cb", LogCategory.AUDIO_CORE, LogLevel.WARNING)
    assert seen == [(LogCategory.AUDIO_CORE, LogLevel.WARNING, "cb")]


def test_clear_log_drops_entries():
    log.log_message("gone", LogCategory.GENERAL, LogLevel.INFO)
    log.clear_log()
    assert log.poll_log() is None


def test_labels(capsys):
    log.log_message("labelled", LogCategory.BEHAVIOR_LOADER, LogLevel.WARNING)
    assert capsys.readouterr().out == "[Log-BehaviorLoader] labelled\n"
    entry = log.poll_log()
    assert entry.category.label == "BehaviorLoader"
    assert entry.level.label == "Warning"


def test_invalid_category_raises():
    with pytest.raises(ValueError):
        log.log_message("bad", 99, LogLevel.INFO)