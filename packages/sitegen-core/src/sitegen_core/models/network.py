# sitegen_core/models/network.py

from ipaddress import IPv4Address, IPv4Network

from pydantic import BaseModel, ConfigDict, Field, field_validator

from sitegen_core.errors import SubnetAllocationError
from sitegen_core.network.subnets import (
    SMALLEST_PREFIX,
    as_network,
    contains,
    free_block,
    prefix_for_hosts,
    total_addresses,
    usable_host_addresses,
)


class IPReservation(BaseModel):
    """One named address in a subnet; ``comment`` usually holds an xname."""

    model_config = ConfigDict(extra="ignore")
    ip_address: IPv4Address
    name: str
    comment: str = ""
    aliases: list[str] = Field(default_factory=list)

    @field_validator("comment", mode="before")
    @classmethod
    def _none_to_blank(cls, v):
        return "" if v is None else v


class Subnet(BaseModel):
    model_config = ConfigDict(extra="ignore")
    name: str
    cidr: IPv4Network
    vlan_id: int = 0
    gateway: IPv4Address | None = None
    ip_reservations: list[IPReservation] = Field(default_factory=list)

    def model_post_init(self, __context) -> None:
        if self.gateway is None and self.cidr.num_addresses > 2:
            self.gateway = self.cidr.network_address + 1

    @property
    def total_addresses(self) -> int:
        return total_addresses(self.cidr)

    @property
    def usable_host_addresses(self) -> int:
        return usable_host_addresses(self.cidr)

    def reserved_ips(self) -> list[IPv4Address]:
        return [r.ip_address for r in self.ip_reservations]

    def reservations_by_name(self) -> dict[str, IPReservation]:
        return {r.name: r for r in self.ip_reservations}

    def lookup_reservation(self, name: str) -> IPReservation | None:
        for reservation in self.ip_reservations:
            if reservation.name == name:
                return reservation
        return None

    def add_reservation(self, name: str, comment: str = "") -> IPReservation:
        """Reserve the lowest free address above the gateway."""
        used = set(self.reserved_ips())
        if self.gateway is not None:
            used.add(self.gateway)
        for address in self.cidr.hosts():
            if address in used:
                continue
            reservation = IPReservation(ip_address=address, name=name, comment=comment)
            self.ip_reservations.append(reservation)
            return reservation
        raise SubnetAllocationError(f"Subnet {self.name} ({self.cidr}) has no free address for {name}")

    def add_reservation_with_ip(self, name: str, address: IPv4Address | str, comment: str = "") -> IPReservation:
        ip = IPv4Address(str(address))
        if ip not in self.cidr:
            raise SubnetAllocationError(
                f'Cannot add "{name}" to {self.name} subnet as {ip}. {ip} is not part of {self.cidr}.'
            )
        if ip == self.gateway:
            raise SubnetAllocationError(f"failed to reserve {ip} for {name}, address is the {self.name} gateway")
        for existing in self.ip_reservations:
            if existing.ip_address == ip:
                raise SubnetAllocationError(
                    f"failed to reserve {ip} for {name}, address already reserved for {existing.name}"
                )
        reservation = IPReservation(ip_address=ip, name=name, comment=comment)
        self.ip_reservations.append(reservation)
        return reservation

    def reserve_net_mgmt_ips(
        self,
        spines: list[str],
        leafs: list[str],
        leaf_bmcs: list[str],
        cdus: list[str],
    ) -> list[IPReservation]:
        """Reserve one address per management switch, named by role and 1-based position."""
        added = []
        for pattern, xnames in (
            ("sw-spine-{:03d}", spines),
            ("sw-leaf-{:03d}", leafs),
            ("sw-leaf-bmc-{:03d}", leaf_bmcs),
            ("sw-cdu-{:03d}", cdus),
        ):
            for i, xname in enumerate(xnames, start=1):
                added.append(self.add_reservation(pattern.format(i), xname))
        return added

    def reserve_edge_switch_ips(self, edges: list[str]) -> list[IPReservation]:
        return [self.add_reservation(f"chn-switch-{i}", xname) for i, xname in enumerate(edges, start=1)]


class IPNetwork(BaseModel):
    """A parent block plus the subnets carved out of it."""

    model_config = ConfigDict(extra="ignore")
    name: str
    cidr: IPv4Network
    subnets: list[Subnet] = Field(default_factory=list)

    def allocated_subnets(self) -> list[IPv4Network]:
        return [s.cidr for s in self.subnets]

    def lookup_subnet(self, name: str) -> Subnet:
        found = [s for s in self.subnets if s.name == name]
        if not found:
            raise KeyError(f'subnet not found "{name}"')
        if len(found) > 1:
            raise ValueError(f"found {len(found)} subnets named {name} instead of just one")
        return found[0]

    def add_subnet_by_cidr(self, cidr: IPv4Network | str, name: str, vlan_id: int = 0) -> Subnet:
        desired = as_network(cidr)
        if not contains(self.cidr, desired):
            raise SubnetAllocationError(f"subnet {desired} is not part of {self.cidr}")
        if any(desired.overlaps(s) for s in self.allocated_subnets()):
            raise SubnetAllocationError(f"subnet {desired} overlaps a subnet already carved from {self.cidr}")
        subnet = Subnet(name=name, cidr=desired, vlan_id=vlan_id)
        self.subnets.append(subnet)
        return subnet

    def add_subnet(self, prefixlen: int, name: str, vlan_id: int = 0) -> Subnet:
        block = free_block(self.cidr, prefixlen, self.allocated_subnets())
        subnet = Subnet(name=name, cidr=block, vlan_id=vlan_id)
        self.subnets.append(subnet)
        return subnet

    def add_subnet_for_hosts(self, host_count: int, name: str, vlan_id: int = 0) -> Subnet:
        return self.add_subnet(prefix_for_hosts(host_count), name, vlan_id)

    def add_biggest_subnet(self, prefixlen: int, name: str, vlan_id: int = 0) -> Subnet:
        """Try a /``prefixlen`` first, then progressively smaller blocks down to /29."""
        for candidate in range(prefixlen, SMALLEST_PREFIX + 1):
            try:
                return self.add_subnet(candidate, name, vlan_id)
            except SubnetAllocationError:
                continue
        raise SubnetAllocationError(
            f"no room for {name} subnet within {self.name} (tried from /{prefixlen} to /{SMALLEST_PREFIX})"
        )
