# tests/test_decorators.py
import logging

import pytest

from exceptions import EngineFailure, FileNotFound
from ufl_utils.decorators import log_and_time


def test_returns_result():
    @log_and_time("stage")
    def stage(a, b):
        return a + b
    assert stage(2, 3) == 5


def test_foreign_error_rethrown_as_stage_error():
    @log_and_time("stage", error_cls=EngineFailure)
    def stage():
        raise ValueError("bad value")
    with pytest.raises(EngineFailure, match="bad value") as info:
        stage()
    assert isinstance(info.value.__cause__, ValueError)


def test_foreign_error_unchanged_without_stage_error():
    @log_and_time("stage", error_cls=None)
    def stage():
        raise RuntimeError("boom")
    with pytest.raises(RuntimeError, match="boom"):
        stage()


def test_ufl_error_passes_through_without_traceback(caplog):
    @log_and_time("stage", error_cls=EngineFailure)
    def stage():
        raise FileNotFound("no file")
    with caplog.at_level(logging.INFO):
        with pytest.raises(FileNotFound):
            stage()
    failed = [r for r in caplog.records if "stage failed" in r.getMessage()]
    assert len(failed) == 1
    assert failed[0].levelno == logging.ERROR
    assert failed[0].exc_info is None
