"""Domain-specific errors for benchctl."""


class BenchError(Exception):
    """Base error for benchctl."""


class ConfigError(BenchError):
    """Raised when a bench configuration file cannot be read or is malformed."""


class ParseError(BenchError):
    """Raised when a command line cannot be parsed."""


class BadArgumentsError(ParseError):
    """Raised when a command has the wrong number of arguments."""


class BadIntegerError(ParseError):
    """Raised when an integer argument does not parse."""


class UnknownCommandError(ParseError):
    """Raised when a command verb is not recognised."""


class ValidationError(BenchError):
    """Base error for commands rejected by bench state."""


class UnknownPortError(ValidationError):
    """Raised when a port index is outside the configured ports."""


class PortOccupiedError(ValidationError):
    """Raised when attaching to a port that already holds a device."""


class UnknownDeviceKindError(ValidationError):
    """Raised when a device kind is not in the catalog."""


class ProtocolMismatchError(ValidationError):
    """Raised when a device kind does not accept the port's protocol."""


class CapacityExceededError(ValidationError):
    """Raised when a devID is outside the configured slots for its category."""


class SlotInUseError(ValidationError):
    """Raised when a category slot already holds a live device."""


class NoDeviceAtPortError(ValidationError):
    """Raised when a port-targeted command finds the port empty."""


class DeviceMustBeOffError(ValidationError):
    """Raised when removing a device that is still powered."""


class DeviceOffError(ValidationError):
    """Raised when a data operation targets an unpowered device."""


class DeviceNotFoundError(ValidationError):
    """Raised when no live device holds a category slot."""


class UnknownCategoryError(ValidationError):
    """Raised when a listing names an unknown device category."""


class LogWriteError(BenchError):
    """Raised when a port log cannot be written to its sink."""
