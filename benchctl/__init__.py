"""Simulated hardware control bench: ports, peripherals, and a command stream."""

__version__ = "0.1.0"
