"""Stable public API for building tooling on top of benchctl.

This module is the supported integration surface for scripts and tests.
Avoid importing from private/internal modules unless intentionally depending on
non-stable internals.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from benchctl.core.config_loader import LoadedConfig, load_config
from benchctl.core.errors import (
    BadArgumentsError,
    BadIntegerError,
    BenchError,
    CapacityExceededError,
    ConfigError,
    DeviceMustBeOffError,
    DeviceNotFoundError,
    DeviceOffError,
    LogWriteError,
    NoDeviceAtPortError,
    ParseError,
    PortOccupiedError,
    ProtocolMismatchError,
    SlotInUseError,
    UnknownCategoryError,
    UnknownCommandError,
    UnknownDeviceKindError,
    UnknownPortError,
    ValidationError,
)
from benchctl.core.model import (
    BenchConfig,
    Category,
    CommandResult,
    DeviceListing,
    PortListing,
    PowerState,
    ProtocolKind,
)
from benchctl.core.service import BenchService
from benchctl.sinks.base import LogSink
from benchctl.sinks.file import FileLogSink

__all__ = [
    "BenchError",
    "ConfigError",
    "ParseError",
    "BadArgumentsError",
    "BadIntegerError",
    "UnknownCommandError",
    "ValidationError",
    "UnknownPortError",
    "PortOccupiedError",
    "UnknownDeviceKindError",
    "ProtocolMismatchError",
    "CapacityExceededError",
    "SlotInUseError",
    "NoDeviceAtPortError",
    "DeviceMustBeOffError",
    "DeviceOffError",
    "DeviceNotFoundError",
    "UnknownCategoryError",
    "LogWriteError",
    "BenchConfig",
    "Category",
    "CommandResult",
    "DeviceListing",
    "PortListing",
    "PowerState",
    "ProtocolKind",
    "FileLogSink",
    "LogSink",
    "LoadedConfig",
    "load_config",
    "Client",
]


class Client:
    """Public client for driving a simulated bench.

    A `Client` wraps the device registry and command dispatcher behind a
    stable API. Commands go through the same dispatcher as the CLI, so
    results and error messages match what `benchctl` prints.
    """

    def __init__(
        self,
        config: BenchConfig,
        *,
        sink: LogSink | None = None,
        load_warnings: tuple[str, ...] = (),
    ) -> None:
        self._service = BenchService(config, sink=sink)
        self._load_warnings = load_warnings

    @classmethod
    def from_config_file(cls, path: Path | str, log_dir: Path | str) -> Client:
        loaded = load_config(path)
        return cls(loaded.config, sink=FileLogSink(log_dir), load_warnings=loaded.warnings)

    @property
    def load_warnings(self) -> tuple[str, ...]:
        return self._load_warnings

    def execute(self, line: str) -> CommandResult:
        return self._service.execute(line)

    def run(self, lines: Iterable[str]) -> list[CommandResult]:
        return list(self._service.run(lines))

    def flush_logs(self) -> list[str]:
        return self._service.flush_logs()

    def list_ports(self) -> list[PortListing]:
        return self._service.registry.list_ports()

    def list_devices(self, category: Category | str) -> list[DeviceListing]:
        if isinstance(category, str):
            category = Category.from_token(category)
        return self._service.registry.list_by_category(category)

    def port_log(self, index: int) -> tuple[str, ...]:
        return self._service.registry.port(index).entries
