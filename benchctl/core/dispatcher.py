"""Command dispatcher mapping bench verbs to registry and device operations.

Verbs are registered with the ``verb`` decorator, which records the usage
string and accepted argument count. ``CommandDispatcher.dispatch`` never
raises ``BenchError``: every failure becomes an unsuccessful
``CommandResult`` so the command loop can continue.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from benchctl.core.errors import BadArgumentsError, BadIntegerError, BenchError, UnknownCommandError
from benchctl.core.model import Category, CommandResult, DeviceListing, PortListing
from benchctl.core.registry import DeviceRegistry

LOGGER = logging.getLogger(__name__)
_INTEGER = re.compile(r"[+-]?[0-9]+")

EXIT = "exit"


@dataclass(frozen=True)
class VerbInfo:
    name: str
    usage: str
    handler: Callable[..., CommandResult]
    min_args: int = 0
    max_args: int | None = None

    def check_arity(self, args: Sequence[str]) -> None:
        if len(args) < self.min_args or (self.max_args is not None and len(args) > self.max_args):
            raise BadArgumentsError(f"Invalid arguments for {self.name}. Usage: {self.usage}")


_VERBS: dict[str, VerbInfo] = {}


def verb(name: str, usage: str, min_args: int = 0, max_args: int | None = None):
    """Register a dispatcher method as the handler for ``name``."""

    def decorator(func: Callable[..., CommandResult]) -> Callable[..., CommandResult]:
        _VERBS[name] = VerbInfo(
            name=name,
            usage=usage,
            handler=func,
            min_args=min_args,
            max_args=max_args,
        )
        return func

    return decorator


def get_verbs() -> dict[str, VerbInfo]:
    return dict(_VERBS)


def parse_int(value: str, name: str) -> int:
    # ASCII digits only; int() would also take "1_0" and non-ASCII digits
    if not _INTEGER.fullmatch(value):
        raise BadIntegerError(f"Invalid {name}: '{value}' is not an integer.")
    return int(value)


def format_port(listing: PortListing) -> str:
    if not listing.occupied:
        return f"{listing.port_index} {listing.protocol} empty"
    return (
        f"{listing.port_index} {listing.protocol} occupied {listing.device_name} "
        f"{listing.device_type} {listing.dev_id} {listing.power}"
    )


def format_device(listing: DeviceListing) -> str:
    return f"{listing.device_name} {listing.dev_id} {listing.port_index} {listing.protocol}"


class CommandDispatcher:
    def __init__(
        self,
        registry: DeviceRegistry,
        on_exit: Callable[[], Sequence[str]] | None = None,
    ) -> None:
        self.registry = registry
        self._on_exit = on_exit

    def dispatch(self, line: str) -> CommandResult:
        parts = line.split()
        if not parts:
            return CommandResult(True)

        info = _VERBS.get(parts[0])
        try:
            if info is None:
                raise UnknownCommandError(f"Unknown command: {line.strip()}")
            args = parts[1:]
            info.check_arity(args)
            return info.handler(self, args)
        except BenchError as exc:
            LOGGER.debug("Command %r failed: %s", line, exc)
            return CommandResult(False, str(exc))

    @verb("turnON", "turnON <portID>", 1, 1)
    def turn_on(self, args: Sequence[str]) -> CommandResult:
        device = self.registry.lookup_by_port(parse_int(args[0], "portID"))
        if not device.turn_on():
            return CommandResult(True)
        return CommandResult(True, f"{device.name}: Turning ON.")

    @verb("turnOFF", "turnOFF <portID>", 1, 1)
    def turn_off(self, args: Sequence[str]) -> CommandResult:
        device = self.registry.lookup_by_port(parse_int(args[0], "portID"))
        if not device.turn_off():
            return CommandResult(True)
        return CommandResult(True, f"{device.name}: Turning OFF.")

    @verb("addDev", "addDev <devName> <portID> <devID>", 3, 3)
    def add_device(self, args: Sequence[str]) -> CommandResult:
        port_id = parse_int(args[1], "portID")
        dev_id = parse_int(args[2], "devID")
        self.registry.attach(args[0], port_id, dev_id)
        return CommandResult(True, "Device added.")

    @verb("rmDev", "rmDev <portID>", 1, 1)
    def remove_device(self, args: Sequence[str]) -> CommandResult:
        self.registry.detach(parse_int(args[0], "portID"))
        return CommandResult(True, "Device removed.")

    @verb("list", "list ports | list <Sensor|Display|WirelessIO|MotorDriver>", 1, 1)
    def list_(self, args: Sequence[str]) -> CommandResult:
        if args[0].lower() == "ports":
            lines = ["list of ports:"]
            lines.extend(format_port(listing) for listing in self.registry.list_ports())
            return CommandResult(True, "\n".join(lines))

        category = Category.from_token(args[0])
        lines = [category.heading]
        lines.extend(format_device(listing) for listing in self.registry.list_by_category(category))
        return CommandResult(True, "\n".join(lines))

    @verb("readSensor", "readSensor <devID>", 1, 1)
    def read_sensor(self, args: Sequence[str]) -> CommandResult:
        sensor = self.registry.lookup_by_id(Category.SENSOR, parse_int(args[0], "devID"))
        return CommandResult(True, sensor.read())

    @verb("printDisplay", "printDisplay <devID> <text>", 2)
    def print_display(self, args: Sequence[str]) -> CommandResult:
        display = self.registry.lookup_by_id(Category.DISPLAY, parse_int(args[0], "devID"))
        return CommandResult(True, display.print_text(" ".join(args[1:])))

    @verb("readWireless", "readWireless <devID>", 1, 1)
    def read_wireless(self, args: Sequence[str]) -> CommandResult:
        adapter = self.registry.lookup_by_id(Category.WIRELESS_ADAPTER, parse_int(args[0], "devID"))
        message = adapter.receive()
        return CommandResult(True, f'{adapter.name}: Received "{message}".\n{message}')

    @verb("writeWireless", "writeWireless <devID> <text>", 2)
    def write_wireless(self, args: Sequence[str]) -> CommandResult:
        adapter = self.registry.lookup_by_id(Category.WIRELESS_ADAPTER, parse_int(args[0], "devID"))
        return CommandResult(True, adapter.send(" ".join(args[1:])))

    @verb("setMotorSpeed", "setMotorSpeed <devID> <speed>", 2, 2)
    def set_motor_speed(self, args: Sequence[str]) -> CommandResult:
        dev_id = parse_int(args[0], "devID")
        speed = parse_int(args[1], "speed")
        driver = self.registry.lookup_by_id(Category.MOTOR_DRIVER, dev_id)
        return CommandResult(True, driver.set_speed(speed))

    @verb(EXIT, EXIT)
    def exit_(self, args: Sequence[str]) -> CommandResult:
        errors = tuple(self._on_exit()) if self._on_exit else ()
        return CommandResult(True, "Exiting ...", errors=errors)
