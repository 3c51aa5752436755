from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterator

import pytest


_PCMWAVE_VARS = (
    "PCMWAVE_SAMPLE_RATE",
    "PCMWAVE_BITS_PER_SAMPLE",
    "PCMWAVE_CHANNELS",
    "PCMWAVE_LOG_LEVEL",
)


@pytest.fixture()
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    """Isolate $HOME, XDG config and cwd so tests never read real user config."""
    home = tmp_path / "home"
    home.mkdir(parents=True, exist_ok=True)
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("USERPROFILE", str(home))
    monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)

    workdir = tmp_path / "work"
    workdir.mkdir(parents=True, exist_ok=True)
    monkeypatch.chdir(workdir)

    for name in _PCMWAVE_VARS:
        monkeypatch.delenv(name, raising=False)

    import pcmwave.config as config

    monkeypatch.setattr(config, "_ENV_LOADED", False)
    yield home

    # dotenv loads straight into os.environ, outside monkeypatch.
    for name in _PCMWAVE_VARS:
        os.environ.pop(name, None)


@pytest.fixture(autouse=True)
def package_logger() -> Iterator[logging.Logger]:
    """Give each test a bare ``pcmwave`` logger and restore it afterwards."""
    logger = logging.getLogger("pcmwave")
    saved_handlers = list(logger.handlers)
    saved_level = logger.level
    for handler in saved_handlers:
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    yield logger
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    for handler in saved_handlers:
        logger.addHandler(handler)
    logger.setLevel(saved_level)
