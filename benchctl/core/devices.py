"""Device records, category behavior, and the power state machine.

Every device is bound to one port and starts OFF. ``turn_on``/``turn_off``
are idempotent and only log on an actual transition. Data operations
require the device to be ON and raise ``DeviceOffError`` before touching
the port otherwise.
"""

from __future__ import annotations

from benchctl.core.catalog import IMU_SENSOR, DeviceKind
from benchctl.core.errors import DeviceOffError
from benchctl.core.model import Category, PowerState
from benchctl.core.ports import ProtocolPort

TEMPERATURE_C = 24.0
ACCELERATION = 1.0
ROTATION = 0.5
EMPTY_MESSAGE = "null"


class Device:
    def __init__(self, kind: DeviceKind, port: ProtocolPort, dev_id: int) -> None:
        self.kind = kind
        self.port = port
        self.dev_id = dev_id
        self.power = PowerState.OFF

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(kind={self.kind.name}, port={self.port.index}, "
            f"dev_id={self.dev_id}, power={self.power.value})"
        )

    @property
    def name(self) -> str:
        return self.kind.name

    @property
    def category(self) -> Category:
        return self.kind.category

    @property
    def type_label(self) -> str:
        return self.kind.type_label

    @property
    def is_on(self) -> bool:
        return self.power is PowerState.ON

    def turn_on(self) -> bool:
        """Power the device on. Returns False if it was already on."""
        if self.is_on:
            return False
        self.port.write('Writing "turnON".')
        self.power = PowerState.ON
        return True

    def turn_off(self) -> bool:
        """Power the device off. Returns False if it was already off."""
        if not self.is_on:
            return False
        self.port.write('Writing "turnOFF".')
        self.power = PowerState.OFF
        return True

    def _require_on(self, action: str) -> None:
        if not self.is_on:
            raise DeviceOffError(f"Device is OFF. Turn it ON to {action}.")


class Sensor(Device):
    def reading(self) -> str:
        if self.kind.sensor_type == IMU_SENSOR:
            return f"Accel: {ACCELERATION:.2f}, Rot: {ROTATION:.2f}"
        return f"Temp: {TEMPERATURE_C:.2f}C"

    def read(self) -> str:
        self._require_on("read data")
        self.port.read()
        return f"{self.name} {self.type_label}: {self.reading()}."


class Display(Device):
    def print_text(self, text: str) -> str:
        self._require_on("print")
        self.port.write(f"printDisplay {text}")
        return f'{self.name}: Printing "{text}".'


class WirelessAdapter(Device):
    def __init__(self, kind: DeviceKind, port: ProtocolPort, dev_id: int) -> None:
        super().__init__(kind, port, dev_id)
        self.outbox: list[str] = []

    def send(self, text: str) -> str:
        self._require_on("write")
        self.port.write(f'Writing "{text}".')
        self.outbox.append(text)
        return f'{self.name}: Sending "{text}".'

    def receive(self) -> str:
        """Pop the most recently sent message, or ``"null"`` when none is queued."""
        self._require_on("read")
        self.port.read()
        return self.outbox.pop() if self.outbox else EMPTY_MESSAGE


class MotorDriver(Device):
    def __init__(self, kind: DeviceKind, port: ProtocolPort, dev_id: int) -> None:
        super().__init__(kind, port, dev_id)
        self.speed: int | None = None

    def set_speed(self, speed: int) -> str:
        self._require_on("set speed")
        self.port.write(f"setMotorSpeed {speed}")
        self.speed = speed
        return f"{self.name}: Setting speed to {speed}."


DEVICE_TYPES: dict[Category, type[Device]] = {
    Category.SENSOR: Sensor,
    Category.DISPLAY: Display,
    Category.WIRELESS_ADAPTER: WirelessAdapter,
    Category.MOTOR_DRIVER: MotorDriver,
}


def build_device(kind: DeviceKind, port: ProtocolPort, dev_id: int) -> Device:
    return DEVICE_TYPES[kind.category](kind, port, dev_id)
