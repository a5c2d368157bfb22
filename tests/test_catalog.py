from __future__ import annotations

import pytest

from benchctl.core.catalog import DEVICE_KINDS, check_compatible, lookup_kind
from benchctl.core.errors import ProtocolMismatchError, UnknownDeviceKindError
from benchctl.core.model import Category, ProtocolKind


def test_catalog_covers_every_kind() -> None:
    assert set(DEVICE_KINDS) == {
        "DHT11",
        "BME280",
        "MPU6050",
        "GY951",
        "LCD",
        "OLED",
        "Bluetooth",
        "Wifi",
        "PCA9685",
        "SparkFunMD",
    }


@pytest.mark.parametrize(
    ("name", "category", "protocols"),
    [
        ("DHT11", Category.SENSOR, {ProtocolKind.ONE_WIRE}),
        ("BME280", Category.SENSOR, {ProtocolKind.I2C, ProtocolKind.SPI}),
        ("MPU6050", Category.SENSOR, {ProtocolKind.I2C}),
        ("GY951", Category.SENSOR, {ProtocolKind.SPI, ProtocolKind.UART}),
        ("LCD", Category.DISPLAY, {ProtocolKind.I2C}),
        ("OLED", Category.DISPLAY, {ProtocolKind.SPI}),
        ("Bluetooth", Category.WIRELESS_ADAPTER, {ProtocolKind.UART}),
        ("Wifi", Category.WIRELESS_ADAPTER, {ProtocolKind.SPI, ProtocolKind.UART}),
        ("PCA9685", Category.MOTOR_DRIVER, {ProtocolKind.I2C}),
        ("SparkFunMD", Category.MOTOR_DRIVER, {ProtocolKind.SPI}),
    ],
)
def test_kind_category_and_protocols(name: str, category: Category, protocols: set[ProtocolKind]) -> None:
    kind = lookup_kind(name)
    assert kind.category is category
    assert set(kind.protocols) == protocols


def test_unknown_kind_rejected() -> None:
    with pytest.raises(UnknownDeviceKindError):
        lookup_kind("Arduino")


def test_kind_lookup_is_case_sensitive() -> None:
    with pytest.raises(UnknownDeviceKindError):
        lookup_kind("lcd")


def test_mismatch_names_accepted_protocols() -> None:
    with pytest.raises(ProtocolMismatchError) as exc:
        check_compatible(lookup_kind("Wifi"), ProtocolKind.I2C)
    assert "SPI, UART" in str(exc.value)


def test_type_labels() -> None:
    assert lookup_kind("DHT11").type_label == "TempSensor Sensor"
    assert lookup_kind("GY951").type_label == "IMUSensor Sensor"
    assert lookup_kind("OLED").type_label == "Display"
    assert lookup_kind("Bluetooth").type_label == "WirelessIO"
    assert lookup_kind("SparkFunMD").type_label == "MotorDriver"
