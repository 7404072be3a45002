"""
Runtime configuration.

Values come from the environment, after a local .env file (if any) has been
loaded. Missing Supabase values fall back to empty strings; they are not
validated here, a wrong URL or key shows up as a storage error on first use.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

from brainslots.model import DEFAULT_CUTOFF_HOUR, DEFAULT_TIMEZONE

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Settings:
    supabase_url: str = ""
    supabase_key: str = ""
    timezone: str = DEFAULT_TIMEZONE
    cutoff_hour: int = DEFAULT_CUTOFF_HOUR


def _first(env: Mapping[str, str], *names: str) -> str:
    for name in names:
        value = env.get(name)
        if value:
            return value
    return ""


def _parse_hour(raw: str) -> int:
    try:
        hour = int(raw)
    except ValueError:
        return DEFAULT_CUTOFF_HOUR
    if not (0 <= hour <= 23):
        return DEFAULT_CUTOFF_HOUR
    return hour


def _parse_timezone(raw: str) -> str:
    """
    Return `raw` if it names a known IANA timezone, else the default.
    """
    if not raw:
        return DEFAULT_TIMEZONE
    try:
        ZoneInfo(raw)
    except (ZoneInfoNotFoundError, ValueError, OSError):
        logger.warning("Unknown timezone %r, using %s", raw, DEFAULT_TIMEZONE)
        return DEFAULT_TIMEZONE
    return raw


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Build Settings from `env`, or from os.environ plus .env when env is None.

    Passing an explicit mapping skips .env loading, which keeps tests
    independent of the developer's machine.
    """
    if env is None:
        load_dotenv()
        env = os.environ

    return Settings(
        # the NEXT_PUBLIC_* names are what the web deployment's .env uses
        supabase_url=_first(env, "SUPABASE_URL", "NEXT_PUBLIC_SUPABASE_URL"),
        supabase_key=_first(env, "SUPABASE_ANON_KEY", "NEXT_PUBLIC_SUPABASE_ANON_KEY"),
        timezone=_parse_timezone(_first(env, "BRAINSLOTS_TIMEZONE")),
        cutoff_hour=_parse_hour(_first(env, "BRAINSLOTS_CUTOFF_HOUR") or str(DEFAULT_CUTOFF_HOUR)),
    )
