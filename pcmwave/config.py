"""Default format parameters from the environment.

Values come from (highest precedence first):
  1) the process environment,
  2) ~/.config/pcmwave/pcmwave.env,
  3) a `.env` in the current directory.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from pcmwave.errors import PcmWaveConfigError
from pcmwave.header import SUPPORTED_BIT_DEPTHS


APP_NAME = "pcmwave"

SAMPLE_RATE_ENV = "PCMWAVE_SAMPLE_RATE"
BITS_PER_SAMPLE_ENV = "PCMWAVE_BITS_PER_SAMPLE"
CHANNELS_ENV = "PCMWAVE_CHANNELS"

DEFAULT_SAMPLE_RATE = 44100
DEFAULT_BITS_PER_SAMPLE = 16
DEFAULT_CHANNELS = 1

_ENV_LOADED = False


def config_home() -> Path:
    xdg_config_home = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config_home:
        return Path(xdg_config_home)
    return Path.home() / ".config"


def env_file_path() -> Path:
    return config_home() / APP_NAME / f"{APP_NAME}.env"


def load_environment(*, load_cwd_dotenv: bool = True) -> None:
    """Load dotenv files into os.environ once; existing variables are kept."""
    global _ENV_LOADED
    if _ENV_LOADED:
        return
    _ENV_LOADED = True

    env_path = env_file_path()
    if env_path.is_file():
        load_dotenv(dotenv_path=env_path, override=False)
    if load_cwd_dotenv:
        local_env = Path.cwd() / ".env"
        if local_env.is_file():
            load_dotenv(dotenv_path=local_env, override=False)


def _int_from_env(name: str, default: int) -> int:
    raw = (os.environ.get(name) or "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise PcmWaveConfigError(f"{name} must be an integer, got {raw!r}") from None
    if value <= 0:
        raise PcmWaveConfigError(f"{name} must be positive, got {value}")
    return value


def get_sample_rate(*, load_env: bool = True) -> int:
    if load_env:
        load_environment()
    return _int_from_env(SAMPLE_RATE_ENV, DEFAULT_SAMPLE_RATE)


def get_channels(*, load_env: bool = True) -> int:
    if load_env:
        load_environment()
    return _int_from_env(CHANNELS_ENV, DEFAULT_CHANNELS)


def get_bits_per_sample(*, load_env: bool = True) -> int:
    if load_env:
        load_environment()
    value = _int_from_env(BITS_PER_SAMPLE_ENV, DEFAULT_BITS_PER_SAMPLE)
    if value not in SUPPORTED_BIT_DEPTHS:
        raise PcmWaveConfigError(
            f"{BITS_PER_SAMPLE_ENV} must be 8 or 16, got {value}"
        )
    return value


@dataclass(frozen=True)
class FormatDefaults:
    num_channels: int
    sample_rate: int
    bits_per_sample: int


def get_format_defaults(*, load_env: bool = True) -> FormatDefaults:
    if load_env:
        load_environment()
    return FormatDefaults(
        num_channels=get_channels(load_env=False),
        sample_rate=get_sample_rate(load_env=False),
        bits_per_sample=get_bits_per_sample(load_env=False),
    )
