"""Log sink writing one ``<Protocol>_<index>.log`` file per port."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from benchctl.core.errors import LogWriteError


class FileLogSink:
    def __init__(self, log_dir: Path | str) -> None:
        self.log_dir = Path(log_dir)

    def path_for(self, log_name: str) -> Path:
        return self.log_dir / f"{log_name}.log"

    def write(self, log_name: str, entries: Sequence[str]) -> None:
        path = self.path_for(log_name)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise LogWriteError(f"Could not create log directory {path.parent}: {exc}") from exc

        try:
            path.write_text("".join(f"{entry}\n" for entry in entries), encoding="utf-8")
        except OSError as exc:
            raise LogWriteError(f"Error writing log file for port: {log_name} ({exc})") from exc
