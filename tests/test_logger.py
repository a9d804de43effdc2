"""Tests for the console Logger."""

import io

import pytest

from mtran_client.logger import Logger


def test_filters_below_level():
    stream = io.StringIO()
    logger = Logger("filter-test", level="WARNING", stream=stream)

    logger.debug("hidden")
    logger.info("hidden too")
    logger.warning("shown")
    logger.error("also shown")

    lines = stream.getvalue().splitlines()
    assert len(lines) == 2
    assert lines[0].endswith("filter-test:WARNING shown")
    assert lines[1].endswith("filter-test:ERROR also shown")


def test_same_name_and_settings_share_instance():
    stream = io.StringIO()
    a = Logger("shared", "INFO", stream=stream)
    b = Logger("shared", "INFO", stream=stream)
    c = Logger("shared", "DEBUG", stream=stream)

    assert a is b
    assert c is not a
    assert c.level == "DEBUG"


def test_child_inherits_settings():
    stream = io.StringIO()
    parent = Logger("parent", level="DEBUG", msg_format="{levelname}|{name}|{message}", stream=stream)
    child = parent.get_child("Child")

    child.debug("hello")

    assert child.name == "parent.Child"
    assert stream.getvalue() == "DEBUG|parent.Child|hello\n"


def test_defaults_to_stderr(capsys):
    Logger("stderr-test", level="INFO").info("to stderr")

    captured = capsys.readouterr()
    assert captured.out == ""
    assert "stderr-test:INFO to stderr" in captured.err


def test_unknown_level_rejected():
    with pytest.raises(ValueError):
        Logger("bad-level", level="VERBOSE")
