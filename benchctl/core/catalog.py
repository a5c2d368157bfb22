"""Static catalog of device kinds and the protocols each one accepts."""

from __future__ import annotations

from dataclasses import dataclass

from benchctl.core.errors import ProtocolMismatchError, UnknownDeviceKindError
from benchctl.core.model import Category, ProtocolKind

TEMP_SENSOR = "TempSensor"
IMU_SENSOR = "IMUSensor"


@dataclass(frozen=True)
class DeviceKind:
    name: str
    category: Category
    protocols: frozenset[ProtocolKind]
    sensor_type: str | None = None

    @property
    def type_label(self) -> str:
        if self.sensor_type:
            return f"{self.sensor_type} {self.category.label}"
        return self.category.label

    def accepts(self, protocol: ProtocolKind) -> bool:
        return protocol in self.protocols


def _kind(
    name: str,
    category: Category,
    *protocols: ProtocolKind,
    sensor_type: str | None = None,
) -> DeviceKind:
    return DeviceKind(
        name=name,
        category=category,
        protocols=frozenset(protocols),
        sensor_type=sensor_type,
    )


DEVICE_KINDS: dict[str, DeviceKind] = {
    kind.name: kind
    for kind in (
        _kind("DHT11", Category.SENSOR, ProtocolKind.ONE_WIRE, sensor_type=TEMP_SENSOR),
        _kind("BME280", Category.SENSOR, ProtocolKind.I2C, ProtocolKind.SPI, sensor_type=TEMP_SENSOR),
        _kind("MPU6050", Category.SENSOR, ProtocolKind.I2C, sensor_type=IMU_SENSOR),
        _kind("GY951", Category.SENSOR, ProtocolKind.SPI, ProtocolKind.UART, sensor_type=IMU_SENSOR),
        _kind("LCD", Category.DISPLAY, ProtocolKind.I2C),
        _kind("OLED", Category.DISPLAY, ProtocolKind.SPI),
        _kind("Bluetooth", Category.WIRELESS_ADAPTER, ProtocolKind.UART),
        _kind("Wifi", Category.WIRELESS_ADAPTER, ProtocolKind.SPI, ProtocolKind.UART),
        _kind("PCA9685", Category.MOTOR_DRIVER, ProtocolKind.I2C),
        _kind("SparkFunMD", Category.MOTOR_DRIVER, ProtocolKind.SPI),
    )
}


def lookup_kind(name: str) -> DeviceKind:
    kind = DEVICE_KINDS.get(name)
    if kind is None:
        raise UnknownDeviceKindError(f"Unknown device type '{name}'.")
    return kind


def check_compatible(kind: DeviceKind, protocol: ProtocolKind) -> None:
    if not kind.accepts(protocol):
        accepted = ", ".join(sorted(p.value for p in kind.protocols))
        raise ProtocolMismatchError(
            f"Device and protocol mismatch: {kind.name} does not support {protocol.value}"
            f" (accepts {accepted})."
        )
