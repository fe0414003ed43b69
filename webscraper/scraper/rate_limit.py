"""Courtesy delay issued once before the page fetch."""

from __future__ import annotations

import time
from typing import Callable, Optional


def wait(delay_ms: int, sleep: Optional[Callable[[float], None]] = None) -> None:
    """Block for exactly *delay_ms* milliseconds.  ``0`` does not sleep at all."""
    if delay_ms < 0:
        raise ValueError(f"delay must be non-negative, got {delay_ms}")
    if delay_ms:
        (sleep or time.sleep)(delay_ms / 1000)
