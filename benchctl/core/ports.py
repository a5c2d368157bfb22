"""Protocol ports and their append-only activity logs."""

from __future__ import annotations

from benchctl.core.errors import BadArgumentsError
from benchctl.core.model import ProtocolKind

PORT_OPENED = "Port Opened."
READING = "Reading."


class ProtocolPort:
    """A configured communication channel.

    The activity log is kept oldest-first for the whole run; ``snapshot``
    hands the full log back most-recent-first without clearing it.
    """

    def __init__(self, index: int, kind: ProtocolKind) -> None:
        self.index = index
        self.kind = kind
        self._log: list[str] = [PORT_OPENED]

    def __repr__(self) -> str:
        return f"ProtocolPort(index={self.index}, kind={self.kind.value})"

    @property
    def name(self) -> str:
        return self.kind.value

    @property
    def log_name(self) -> str:
        return f"{self.name}_{self.index}"

    @property
    def entries(self) -> tuple[str, ...]:
        return tuple(self._log)

    def read(self) -> str:
        self.log(READING)
        return f"{self.name}:{READING}"

    def write(self, data: str) -> None:
        if not data:
            raise BadArgumentsError(f"{self.name}: Cannot write empty data.")
        self.log(data)

    def log(self, entry: str) -> None:
        self._log.append(entry)

    def snapshot(self) -> list[str]:
        return list(reversed(self._log))
