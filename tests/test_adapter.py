import io

import pytest

from ngebut.log import adapter
from ngebut.log.adapter import AdapterEvent, AdapterLogger, get_logger, set_logger
from ngebut.log.logger import Level, Logger, get_default_logger


class MockEvent:
    def __init__(self):
        self.err_called = False
        self.error = None
        self.msg_called = False
        self.message = None
        self.msgf_called = False
        self.fmt = None
        self.args = ()

    def err(self, error):
        self.err_called = True
        self.error = error
        return self

    def msg(self, message):
        self.msg_called = True
        self.message = message

    def msgf(self, fmt, *args):
        self.msgf_called = True
        self.fmt = fmt
        self.args = args


class MockLogger:
    def __init__(self):
        self.calls = []
        self._level = Level.INFO
        self.level_reads = 0
        self.level_writes = 0
        self.mock_event = None

    def _record(self, name):
        self.calls.append(name)
        self.mock_event = MockEvent()
        return self.mock_event

    def debug(self):
        return self._record("debug")

    def info(self):
        return self._record("info")

    def warn(self):
        return self._record("warn")

    def error(self):
        return self._record("error")

    def fatal(self):
        return self._record("fatal")

    @property
    def level(self):
        self.level_reads += 1
        return self._level

    @level.setter
    def level(self, value):
        self.level_writes += 1
        self._level = value


@pytest.fixture
def restore_global():
    saved = adapter._global_logger
    yield
    set_logger(saved)


def test_get_logger_defaults(restore_global):
    set_logger(None)
    assert get_logger() is get_default_logger()


def test_set_and_get_logger(restore_global):
    mock = MockLogger()
    set_logger(mock)
    assert get_logger() is mock


def test_adapter_event_forwards():
    mock = MockEvent()
    wrapped = AdapterEvent(mock)

    problem = RuntimeError("test error")
    assert wrapped.err(problem) is mock
    assert mock.err_called
    assert mock.error is problem

    wrapped.msg("test message")
    assert mock.msg_called
    assert mock.message == "test message"

    wrapped.msgf("test %s %d", "format", 42)
    assert mock.msgf_called
    assert mock.fmt == "test %s %d"
    assert mock.args == ("format", 42)


def test_adapter_logger_forwards():
    mock = MockLogger()
    wrapped = AdapterLogger(mock)

    assert wrapped.debug() is mock.mock_event
    assert wrapped.info() is mock.mock_event
    assert wrapped.warn() is mock.mock_event
    assert wrapped.error() is mock.mock_event
    assert wrapped.fatal() is mock.mock_event
    assert mock.calls == ["debug", "info", "warn", "error", "fatal"]

    wrapped.level = Level.WARN
    assert mock.level_writes == 1
    assert mock._level == Level.WARN

    mock._level = Level.ERROR
    assert wrapped.level == Level.ERROR
    assert mock.level_reads == 1


def test_new_adapter_logger_holds_logger():
    mock = MockLogger()
    assert AdapterLogger(mock).logger is mock


def test_adapter_over_real_logger():
    buf = io.StringIO()
    wrapped = AdapterLogger(Logger(buf, Level.INFO))
    assert wrapped.debug() is None
    AdapterEvent(wrapped.warn()).msg("careful")
    assert buf.getvalue().endswith("| WARN | careful")