# sitegen_core/models/switch.py
from enum import Enum
from ipaddress import IPv4Address

from pydantic import BaseModel, ConfigDict, field_validator


class ManagementSwitchType(str, Enum):
    """Declared role of a management switch."""

    LEAF_BMC = "LeafBMC"
    SPINE = "Spine"
    LEAF = "Leaf"
    CDU = "CDU"
    EDGE = "Edge"

    def __str__(self) -> str:
        return self.value


class ManagementSwitchBrand(str, Enum):
    ARUBA = "Aruba"
    DELL = "Dell"
    MELLANOX = "Mellanox"
    ARISTA = "Arista"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_vendor(cls, vendor: str) -> "ManagementSwitchBrand | None":
        """Map a free-form vendor string (``aruba``, ``DELL``) onto a brand."""
        needle = (vendor or "").strip().lower()
        for brand in cls:
            if brand.value.lower() == needle:
                return brand
        return None


class ManagementSwitch(BaseModel):
    """One inventory-worthy switch.

    ``switch_type`` is the *declared* role. The effective inventory class can
    differ (a CDU switch racked in a River cabinet is inventoried as a
    high-level switch); see ``sitegen_core.naming.rules.effective_class``.
    """

    model_config = ConfigDict(extra="ignore")
    xname: str
    name: str
    brand: ManagementSwitchBrand | str | None = None
    model: str = ""
    # unknown values are kept verbatim so the converter can name them
    switch_type: ManagementSwitchType | str | None = None
    management_interface: IPv4Address | None = None

    @field_validator("switch_type", mode="before")
    @classmethod
    def _coerce_type(cls, v):
        if isinstance(v, str) and not isinstance(v, ManagementSwitchType):
            try:
                return ManagementSwitchType(v.strip())
            except ValueError:
                return v
        return v

    @field_validator("brand", mode="before")
    @classmethod
    def _coerce_brand(cls, v):
        if isinstance(v, str) and not isinstance(v, ManagementSwitchBrand):
            return ManagementSwitchBrand.from_vendor(v) or v
        return v

    @field_validator("management_interface", mode="before")
    @classmethod
    def _blank_ip(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v
