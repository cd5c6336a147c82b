"""Shared fixtures."""

import logging

import pytest

from constants import Constants


@pytest.fixture(autouse=True)
def restore_constants():
    """Undo config/CLI overrides applied to Constants by a test."""
    saved = {
        "OUTPUT_FORMAT": Constants.OUTPUT_FORMAT,
        "OUTPUT_INDENT": Constants.OUTPUT_INDENT,
        "FRAMEWORK_ALIASES": dict(Constants.FRAMEWORK_ALIASES),
    }
    yield
    for name, value in saved.items():
        setattr(Constants, name, value)


@pytest.fixture(autouse=True)
def reset_cli_logging():
    """Drop handlers the CLI attached so they never outlive a test."""
    root = logging.getLogger()
    before = list(root.handlers)
    level = root.level
    yield
    root.setLevel(level)
    for handler in list(root.handlers):
        if handler.get_name() == "depmeta-console" or (
                isinstance(handler, logging.FileHandler) and handler not in before):
            root.removeHandler(handler)
            handler.close()
