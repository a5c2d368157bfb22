"""Service layer used by the CLI and the public API."""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Iterable, Iterator

from benchctl.core.dispatcher import EXIT, CommandDispatcher
from benchctl.core.errors import LogWriteError
from benchctl.core.model import BenchConfig, CommandResult
from benchctl.core.registry import DeviceRegistry
from benchctl.sinks.base import LogSink

LOGGER = logging.getLogger(__name__)


class BenchService:
    """Runs a command stream against one bench.

    Commands are read into a FIFO queue until an ``exit`` line, then the
    queue is drained. ``exit`` flushes every port log to the sink but does
    not stop the drain: commands queued after it still execute.
    """

    def __init__(self, config: BenchConfig, *, sink: LogSink | None = None) -> None:
        self.config = config
        self.sink = sink
        self.registry = DeviceRegistry(config)
        self.dispatcher = CommandDispatcher(self.registry, on_exit=self.flush_logs)
        self.queue: deque[str] = deque()

    def submit(self, line: str) -> None:
        self.queue.append(line)

    def read_until_exit(self, source: Iterator[str]) -> bool:
        for line in source:
            line = line.rstrip("\r\n")
            self.submit(line)
            if line.strip() == EXIT:
                return True
        return False

    def run_commands(self) -> Iterator[CommandResult]:
        while self.queue:
            line = self.queue.popleft()
            if not line.strip():
                continue
            yield self.dispatcher.dispatch(line)

    def run(self, lines: Iterable[str]) -> Iterator[CommandResult]:
        source = iter(lines)
        saw_exit = False
        while True:
            batch_exited = self.read_until_exit(source)
            saw_exit = saw_exit or batch_exited
            yield from self.run_commands()
            if not batch_exited:
                break
        if not saw_exit:
            LOGGER.warning("Command stream ended without '%s'; port logs were not flushed", EXIT)

    def execute(self, line: str) -> CommandResult:
        return self.dispatcher.dispatch(line)

    def flush_logs(self) -> list[str]:
        """Write every port's full log to the sink; returns one message per failed port."""
        failures: list[str] = []
        for port in self.registry.ports:
            entries = port.snapshot()
            if self.sink is None:
                continue
            try:
                self.sink.write(port.log_name, entries)
            except LogWriteError as exc:
                LOGGER.error("Log flush failed for %s: %s", port.log_name, exc)
                failures.append(str(exc))
        return failures
