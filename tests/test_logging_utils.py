# tests/test_logging_utils.py
"""
tests for hl7_field_tool.logging_utils
"""

import io
import logging

import pytest

from hl7_field_tool.logging_utils import configure_logging


def test_configure_logging_rejects_non_int_verbosity():
    with pytest.raises(TypeError, match=r"^verbosity must be int"):
        configure_logging("load")


def test_configure_logging_rejects_bool_verbosity():
    with pytest.raises(TypeError, match=r"^verbosity must be int"):
        configure_logging(True)


def test_configure_logging_rejects_negative_verbosity():
    with pytest.raises(ValueError, match=r"^verbosity must be non-negative"):
        configure_logging(-1)


def test_configure_logging_default_is_warning_on_stderr(capsys):
    logger = configure_logging(verbosity=0)
    logger.warning("visible warning")
    logger.info("hidden info")

    out, err = capsys.readouterr()
    assert "visible warning" in err
    assert "hidden info" not in err
    assert out == ""


def test_configure_logging_sets_info_level(capsys):
    logger = configure_logging(verbosity=1)
    logger.info("hello info")
    logger.debug("hidden debug")

    _, err = capsys.readouterr()
    assert "hello info" in err
    assert "hidden debug" not in err


@pytest.mark.parametrize("verbosity", [2, 5])
def test_configure_logging_sets_debug_level(capsys, verbosity):
    logger = configure_logging(verbosity=verbosity)
    logger.debug("visible debug")

    _, err = capsys.readouterr()
    assert "visible debug" in err


def test_configure_logging_accepts_custom_stream():
    buf = io.StringIO()
    logger = configure_logging(verbosity=0, stream=buf)
    logger.warning("routed message")

    assert "routed message" in buf.getvalue()


def test_configure_logging_keeps_file_handlers(tmp_path):
    root = logging.getLogger()
    fh = logging.FileHandler(tmp_path / "log.txt")
    root.addHandler(fh)
    try:
        configure_logging(0, stream=io.StringIO())
        configure_logging(0, stream=io.StringIO())
        assert fh in root.handlers
        plain = [
            h
            for h in root.handlers
            if type(h) is logging.StreamHandler
        ]
        assert len(plain) == 1
    finally:
        root.removeHandler(fh)
        fh.close()


def test_configure_logging_rejects_bad_stream():
    class NotAStream:
        pass

    with pytest.raises(
        TypeError, match=r"^stream must be file-like \(support .write\(...\)\)"
    ):
        configure_logging(0, stream=NotAStream())
