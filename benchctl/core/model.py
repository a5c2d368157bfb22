"""Core data models shared by the registry, dispatcher, service, and CLI."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from benchctl.core.errors import UnknownCategoryError


class ProtocolKind(str, Enum):
    I2C = "I2C"
    SPI = "SPI"
    UART = "UART"
    ONE_WIRE = "OneWire"


class PowerState(str, Enum):
    ON = "ON"
    OFF = "OFF"


class Category(str, Enum):
    """Device category; values are the tokens accepted by ``list``."""

    SENSOR = "sensor"
    DISPLAY = "display"
    WIRELESS_ADAPTER = "wirelessio"
    MOTOR_DRIVER = "motordriver"

    @property
    def label(self) -> str:
        return _CATEGORY_LABELS[self]

    @property
    def heading(self) -> str:
        return _CATEGORY_HEADINGS[self]

    @classmethod
    def from_token(cls, token: str) -> Category:
        try:
            return cls(token.lower())
        except ValueError:
            raise UnknownCategoryError(
                "Unknown device type. Valid types: Sensor, Display, WirelessIO, MotorDriver."
            ) from None


_CATEGORY_LABELS = {
    Category.SENSOR: "Sensor",
    Category.DISPLAY: "Display",
    Category.WIRELESS_ADAPTER: "WirelessIO",
    Category.MOTOR_DRIVER: "MotorDriver",
}

_CATEGORY_HEADINGS = {
    Category.SENSOR: "list of Sensors:",
    Category.DISPLAY: "list of Displays:",
    Category.WIRELESS_ADAPTER: "list of WirelessIOs:",
    Category.MOTOR_DRIVER: "list of Motor drivers:",
}


@dataclass(frozen=True)
class BenchConfig:
    ports: tuple[ProtocolKind, ...] = ()
    max_sensors: int = 0
    max_displays: int = 0
    max_wireless_adapters: int = 0
    max_motor_drivers: int = 0

    def limit_for(self, category: Category) -> int:
        if category is Category.SENSOR:
            return self.max_sensors
        if category is Category.DISPLAY:
            return self.max_displays
        if category is Category.WIRELESS_ADAPTER:
            return self.max_wireless_adapters
        return self.max_motor_drivers


@dataclass(frozen=True)
class PortListing:
    port_index: int
    protocol: str
    occupied: bool
    device_name: str | None = None
    device_type: str | None = None
    dev_id: int | None = None
    power: str | None = None


@dataclass(frozen=True)
class DeviceListing:
    device_name: str
    dev_id: int
    port_index: int
    protocol: str


@dataclass(frozen=True)
class CommandResult:
    success: bool
    message: str = ""
    errors: tuple[str, ...] = ()
