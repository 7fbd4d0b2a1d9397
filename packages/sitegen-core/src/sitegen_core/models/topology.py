# sitegen_core/models/topology.py
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, StrictInt, field_validator

DeviceType = Literal["server", "switch", "pdu", "other"]


class Location(BaseModel):
    """Physical placement of a device: rack plus elevation token."""

    model_config = ConfigDict(extra="ignore")
    rack: str
    elevation: str
    sub_location: str | None = None
    # common name of an enclosing multi-node chassis
    parent: str | None = None

    @field_validator("rack", "elevation", mode="before")
    @classmethod
    def _strip(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("sub_location", "parent", mode="before")
    @classmethod
    def _blank_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v


class Port(BaseModel):
    """One cabled port and the device/port on the other end."""

    model_config = ConfigDict(extra="ignore")
    port: StrictInt
    speed: StrictInt | None = None
    slot: str | None = None
    destination_node_id: StrictInt
    destination_port: StrictInt
    destination_slot: str | None = None


class TopologyNode(BaseModel):
    """One physical device of the cabling diagram."""

    model_config = ConfigDict(extra="ignore")
    id: StrictInt
    common_name: str
    type: DeviceType
    architecture: str
    vendor: str = ""
    model: str = ""
    location: Location | None = None
    ports: list[Port] = Field(default_factory=list)

    @property
    def rack(self) -> str | None:
        return self.location.rack if self.location else None


class Topology(BaseModel):
    """Ordered device list plus lookups by id and by common name.

    Port destinations are weak references: they are resolved through the
    lookup tables, never stored as object links, so cycles are harmless.
    """

    model_config = ConfigDict(extra="ignore")
    nodes: list[TopologyNode] = Field(default_factory=list)

    _by_id: dict[int, TopologyNode] = PrivateAttr(default_factory=dict)
    _by_name: dict[str, TopologyNode] = PrivateAttr(default_factory=dict)

    def model_post_init(self, __context) -> None:
        self._by_id = {n.id: n for n in self.nodes}
        self._by_name = {n.common_name: n for n in self.nodes}

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self):
        return iter(self.nodes)

    def by_id(self, node_id: int) -> TopologyNode | None:
        return self._by_id.get(node_id)

    def by_name(self, name: str) -> TopologyNode | None:
        return self._by_name.get(name)

    def peers(self, node: TopologyNode) -> list[str]:
        """Common names of the devices cabled to ``node``, in port order."""
        names = []
        for port in node.ports:
            peer = self._by_id.get(port.destination_node_id)
            if peer is not None:
                names.append(peer.common_name)
        return names

    def filter_by_type(self, device_type: DeviceType) -> list[TopologyNode]:
        return [n for n in self.nodes if n.type == device_type]


class ShcdDocument(BaseModel):
    """The cabling-diagram document as exported by the SHCD tooling."""

    model_config = ConfigDict(extra="ignore")
    canu_version: str | None = None
    architecture: str | None = None
    shcd_file: str | None = None
    updated_at: str | None = None
    topology: list[TopologyNode]
