"""Device registry: ports plus the by-port and by-slot device indexes."""

from __future__ import annotations

import logging

from benchctl.core.catalog import check_compatible, lookup_kind
from benchctl.core.devices import Device, build_device
from benchctl.core.errors import (
    CapacityExceededError,
    DeviceMustBeOffError,
    DeviceNotFoundError,
    NoDeviceAtPortError,
    PortOccupiedError,
    SlotInUseError,
    UnknownPortError,
)
from benchctl.core.model import BenchConfig, Category, DeviceListing, PortListing
from benchctl.core.ports import ProtocolPort

LOGGER = logging.getLogger(__name__)


class DeviceRegistry:
    """Owns every port and live device on the bench.

    A live device is always present in both ``_by_port`` and ``_slots``;
    attach and detach update the two indexes together.
    """

    def __init__(self, config: BenchConfig) -> None:
        self.config = config
        self.ports: list[ProtocolPort] = [
            ProtocolPort(index, kind) for index, kind in enumerate(config.ports)
        ]
        self._by_port: dict[int, Device] = {}
        self._slots: dict[Category, dict[int, Device]] = {category: {} for category in Category}

    def port(self, port_index: int) -> ProtocolPort:
        if port_index < 0 or port_index >= len(self.ports):
            raise UnknownPortError(f"Invalid portID {port_index}.")
        return self.ports[port_index]

    def attach(self, kind_name: str, port_index: int, dev_id: int) -> Device:
        port = self.port(port_index)
        if port_index in self._by_port:
            raise PortOccupiedError(f"Port {port_index} is already occupied.")

        kind = lookup_kind(kind_name)
        check_compatible(kind, port.kind)

        limit = self.config.limit_for(kind.category)
        if dev_id < 0:
            raise CapacityExceededError(f"Invalid devID {dev_id} for {kind.category.label}.")
        if dev_id >= limit:
            raise CapacityExceededError(
                f"All slots are full for {kind.name}. Maximum limit reached: {limit}"
            )

        slots = self._slots[kind.category]
        if dev_id in slots:
            raise SlotInUseError(f"devID already in use for {kind.category.label}.")

        device = build_device(kind, port, dev_id)
        self._by_port[port_index] = device
        slots[dev_id] = device
        LOGGER.debug("Attached %r", device)
        return device

    def detach(self, port_index: int) -> Device:
        device = self.lookup_by_port(port_index)
        if device.is_on:
            raise DeviceMustBeOffError("Device is ON. Turn it OFF before removal.")

        del self._by_port[port_index]
        del self._slots[device.category][device.dev_id]
        LOGGER.debug("Detached %r", device)
        return device

    def lookup_by_port(self, port_index: int) -> Device:
        self.port(port_index)
        device = self._by_port.get(port_index)
        if device is None:
            raise NoDeviceAtPortError("No device connected to this port.")
        return device

    def lookup_by_id(self, category: Category, dev_id: int) -> Device:
        device = self._slots[category].get(dev_id)
        if device is None:
            raise DeviceNotFoundError(f"No {category.label} exists with devID {dev_id}.")
        return device

    def list_ports(self) -> list[PortListing]:
        listings: list[PortListing] = []
        for port in self.ports:
            device = self._by_port.get(port.index)
            if device is None:
                listings.append(PortListing(port_index=port.index, protocol=port.name, occupied=False))
                continue
            listings.append(
                PortListing(
                    port_index=port.index,
                    protocol=port.name,
                    occupied=True,
                    device_name=device.name,
                    device_type=device.type_label,
                    dev_id=device.dev_id,
                    power=device.power.value,
                )
            )
        return listings

    def list_by_category(self, category: Category) -> list[DeviceListing]:
        return [
            DeviceListing(
                device_name=device.name,
                dev_id=dev_id,
                port_index=device.port.index,
                protocol=device.port.name,
            )
            for dev_id, device in sorted(self._slots[category].items())
        ]

    def __len__(self) -> int:
        return len(self._by_port)
