"""Log sink interfaces."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol


class LogSink(Protocol):
    def write(self, log_name: str, entries: Sequence[str]) -> None:
        """Persist one port's full log, most recent entry first."""
