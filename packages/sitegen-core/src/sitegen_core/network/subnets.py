"""
Subnet carving for address-management networks.

Carves fixed-size child blocks out of a parent CIDR. Previously carved
siblings are always passed in by the caller; nothing here keeps state
between calls.
"""

from __future__ import annotations

import logging
from ipaddress import IPv4Network, ip_network
from typing import Iterable

from sitegen_core.errors import SubnetAllocationError

logger = logging.getLogger(__name__)

# smallest block add_biggest_subnet will settle for
SMALLEST_PREFIX = 29


def as_network(value: IPv4Network | str) -> IPv4Network:
    if isinstance(value, IPv4Network):
        return value
    try:
        net = ip_network(str(value).strip(), strict=False)
    except ValueError as e:
        raise SubnetAllocationError(f"Invalid CIDR {value!r}: {e}") from e
    if not isinstance(net, IPv4Network):
        raise SubnetAllocationError(f"Only IPv4 networks are supported, got {value!r}")
    return net


def total_addresses(network: IPv4Network) -> int:
    return network.num_addresses


def usable_host_addresses(network: IPv4Network) -> int:
    """Usable hosts in a block: /32 -> 1, /31 -> 2, otherwise total minus network and broadcast."""
    if network.prefixlen == 32:
        return 1
    if network.prefixlen == 31:
        return 2
    return network.num_addresses - 2


def prefix_for_hosts(host_count: int) -> int:
    """Longest prefix whose usable host count still covers ``host_count``."""
    if host_count < 1:
        raise SubnetAllocationError(f"Host count must be at least 1, got {host_count}")
    for prefixlen in range(32, -1, -1):
        if usable_host_addresses(IPv4Network(f"0.0.0.0/{prefixlen}")) >= host_count:
            return prefixlen
    raise SubnetAllocationError(f"No IPv4 block can hold {host_count} hosts")


def free_block(
    parent: IPv4Network | str,
    prefixlen: int,
    carved: Iterable[IPv4Network | str] = (),
) -> IPv4Network:
    """First aligned /``prefixlen`` block of ``parent`` disjoint from every ``carved`` sibling."""
    parent_net = as_network(parent)
    taken = [as_network(c) for c in carved]
    if prefixlen < parent_net.prefixlen or prefixlen > 32:
        raise SubnetAllocationError(
            f"A /{prefixlen} block does not fit in {parent_net}"
        )
    for candidate in parent_net.subnets(new_prefix=prefixlen):
        if not any(candidate.overlaps(t) for t in taken):
            logger.debug("Carved %s out of %s", candidate, parent_net)
            return candidate
    raise SubnetAllocationError(
        f"No free /{prefixlen} left in {parent_net} ({len(taken)} subnets already carved)"
    )


def carve_subnet(
    parent: IPv4Network | str,
    host_count: int,
    carved: Iterable[IPv4Network | str] = (),
) -> IPv4Network:
    """Smallest standard block holding ``host_count`` hosts, disjoint from ``carved``.

    Raises:
        SubnetAllocationError: when the parent has no disjoint block of that size left.
    """
    return free_block(parent, prefix_for_hosts(host_count), carved)


def contains(parent: IPv4Network | str, child: IPv4Network | str) -> bool:
    return as_network(child).subnet_of(as_network(parent))
