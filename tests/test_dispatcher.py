from __future__ import annotations

import pytest

from benchctl.core.dispatcher import CommandDispatcher, get_verbs, parse_int
from benchctl.core.model import BenchConfig, ProtocolKind
from benchctl.core.registry import DeviceRegistry


def _dispatcher(*ports: ProtocolKind, on_exit=None) -> CommandDispatcher:
    config = BenchConfig(
        ports=ports or (ProtocolKind.I2C, ProtocolKind.SPI, ProtocolKind.UART, ProtocolKind.ONE_WIRE),
        max_sensors=2,
        max_displays=2,
        max_wireless_adapters=2,
        max_motor_drivers=2,
    )
    return CommandDispatcher(DeviceRegistry(config), on_exit=on_exit)


def _run(dispatcher: CommandDispatcher, *lines: str):
    return [dispatcher.dispatch(line) for line in lines]


def test_verb_table() -> None:
    assert set(get_verbs()) == {
        "turnON",
        "turnOFF",
        "addDev",
        "rmDev",
        "list",
        "readSensor",
        "printDisplay",
        "readWireless",
        "writeWireless",
        "setMotorSpeed",
        "exit",
    }


def test_sensor_scenario() -> None:
    dispatcher = _dispatcher(ProtocolKind.I2C, ProtocolKind.SPI)
    results = _run(
        dispatcher,
        "addDev MPU6050 0 0",
        "addDev MPU6050 0 0",
        "turnON 0",
        "readSensor 0",
        "turnOFF 0",
        "rmDev 0",
    )

    assert results[0].success and results[0].message == "Device added."
    assert not results[1].success
    assert "Port 0 is already occupied" in results[1].message
    assert results[2].message == "MPU6050: Turning ON."
    assert results[3].message == "MPU6050 IMUSensor Sensor: Accel: 1.00, Rot: 0.50."
    assert results[4].message == "MPU6050: Turning OFF."
    assert results[5].success and results[5].message == "Device removed."


def test_list_ports_format() -> None:
    dispatcher = _dispatcher(ProtocolKind.I2C, ProtocolKind.SPI)
    _run(dispatcher, "addDev LCD 0 1", "turnON 0")

    result = dispatcher.dispatch("list ports")
    assert result.message.splitlines() == [
        "list of ports:",
        "0 I2C occupied LCD Display 1 ON",
        "1 SPI empty",
    ]


@pytest.mark.parametrize("token", ["sensor", "SENSOR", "Sensor"])
def test_list_category_is_case_insensitive(token: str) -> None:
    dispatcher = _dispatcher()
    _run(dispatcher, "addDev GY951 2 1", "addDev BME280 1 0")

    result = dispatcher.dispatch(f"list {token}")
    assert result.message.splitlines() == [
        "list of Sensors:",
        "BME280 0 1 SPI",
        "GY951 1 2 UART",
    ]


def test_list_other_categories() -> None:
    dispatcher = _dispatcher()
    _run(dispatcher, "addDev Wifi 1 0", "addDev PCA9685 0 1")

    assert dispatcher.dispatch("list wirelessio").message.splitlines() == [
        "list of WirelessIOs:",
        "Wifi 0 1 SPI",
    ]
    assert dispatcher.dispatch("list motordriver").message.splitlines() == [
        "list of Motor drivers:",
        "PCA9685 1 0 I2C",
    ]
    assert dispatcher.dispatch("list display").message == "list of Displays:"


def test_list_unknown_category() -> None:
    result = _dispatcher().dispatch("list gadgets")
    assert not result.success
    assert "Valid types: Sensor, Display, WirelessIO, MotorDriver" in result.message


def test_wireless_round_trip_is_lifo() -> None:
    dispatcher = _dispatcher()
    results = _run(
        dispatcher,
        "addDev Bluetooth 2 0",
        "turnON 2",
        "readWireless 0",
        "writeWireless 0 a",
        "writeWireless 0 b",
        "readWireless 0",
        "readWireless 0",
    )

    assert results[2].message.splitlines() == ['Bluetooth: Received "null".', "null"]
    assert results[3].message == 'Bluetooth: Sending "a".'
    assert results[5].message.splitlines()[-1] == "b"
    assert results[6].message.splitlines()[-1] == "a"


def test_text_arguments_joined_with_single_spaces() -> None:
    dispatcher = _dispatcher()
    _run(dispatcher, "addDev OLED 1 0", "turnON 1")

    result = dispatcher.dispatch("printDisplay 0   hello    wide   world")
    assert result.message == 'OLED: Printing "hello wide world".'
    assert dispatcher.registry.port(1).entries[-1] == "printDisplay hello wide world"


def test_set_motor_speed() -> None:
    dispatcher = _dispatcher()
    _run(dispatcher, "addDev SparkFunMD 1 0", "turnON 1")

    result = dispatcher.dispatch("setMotorSpeed 0 75")
    assert result.message == "SparkFunMD: Setting speed to 75."
    assert dispatcher.registry.port(1).entries[-1] == "setMotorSpeed 75"


@pytest.mark.parametrize(
    ("setup", "command"),
    [
        ("addDev DHT11 3 0", "readSensor 0"),
        ("addDev LCD 0 0", "printDisplay 0 hi"),
        ("addDev Wifi 2 0", "readWireless 0"),
        ("addDev Wifi 2 0", "writeWireless 0 hi"),
        ("addDev PCA9685 0 0", "setMotorSpeed 0 5"),
    ],
)
def test_data_command_on_off_device_fails_without_logging(setup: str, command: str) -> None:
    dispatcher = _dispatcher()
    dispatcher.dispatch(setup)
    before = [port.entries for port in dispatcher.registry.ports]

    result = dispatcher.dispatch(command)

    assert not result.success
    assert result.message.startswith("Device is OFF")
    assert [port.entries for port in dispatcher.registry.ports] == before


def test_rm_dev_refuses_powered_device() -> None:
    dispatcher = _dispatcher()
    results = _run(dispatcher, "addDev LCD 0 0", "turnON 0", "rmDev 0")

    assert not results[2].success
    assert results[2].message == "Device is ON. Turn it OFF before removal."
    assert dispatcher.registry.lookup_by_port(0).name == "LCD"


def test_repeated_turn_on_prints_nothing() -> None:
    dispatcher = _dispatcher()
    results = _run(dispatcher, "addDev LCD 0 0", "turnON 0", "turnON 0")
    assert results[2].success
    assert results[2].message == ""
    assert dispatcher.registry.port(0).entries.count('Writing "turnON".') == 1


def test_turn_on_empty_port() -> None:
    result = _dispatcher().dispatch("turnON 1")
    assert not result.success
    assert result.message == "No device connected to this port."


@pytest.mark.parametrize(
    ("line", "fragment"),
    [
        ("turnON", "Usage: turnON <portID>"),
        ("turnON 1 2", "Usage: turnON <portID>"),
        ("addDev LCD 0", "Usage: addDev <devName> <portID> <devID>"),
        ("printDisplay 0", "Usage: printDisplay <devID> <text>"),
        ("setMotorSpeed 0", "Usage: setMotorSpeed <devID> <speed>"),
        ("list", "Usage: list"),
        ("turnON one", "Invalid portID: 'one' is not an integer."),
        ("addDev LCD 0 x", "Invalid devID: 'x' is not an integer."),
        ("setMotorSpeed 0 fast", "Invalid speed: 'fast' is not an integer."),
        ("addDev LCD 0 1_0", "Invalid devID: '1_0' is not an integer."),
        ("turnON ٣", "Invalid portID: '٣' is not an integer."),
        ("setMotorSpeed 0 ５", "Invalid speed: '５' is not an integer."),
        ("launch rockets", "Unknown command: launch rockets"),
        ("turnon 0", "Unknown command: turnon 0"),
        ("readSensor 7", "No Sensor exists with devID 7."),
        ("turnOFF 9", "Invalid portID 9."),
    ],
)
def test_errors_become_results(line: str, fragment: str) -> None:
    dispatcher = _dispatcher()
    result = dispatcher.dispatch(line)
    assert not result.success
    assert fragment in result.message
    assert len(dispatcher.registry) == 0


def test_blank_line_is_a_no_op() -> None:
    result = _dispatcher().dispatch("   ")
    assert result.success
    assert result.message == ""


def test_exit_invokes_flush_callback() -> None:
    calls: list[int] = []

    def on_exit() -> list[str]:
        calls.append(1)
        return ["Error writing log file for port: I2C_0"]

    result = _dispatcher(on_exit=on_exit).dispatch("exit")
    assert result.success
    assert result.message == "Exiting ..."
    assert result.errors == ("Error writing log file for port: I2C_0",)
    assert calls == [1]


@pytest.mark.parametrize(("token", "expected"), [("7", 7), ("+7", 7), ("-2", -2), ("007", 7)])
def test_parse_int_accepts_signed_ascii_digits(token: str, expected: int) -> None:
    assert parse_int(token, "speed") == expected
