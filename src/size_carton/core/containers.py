"""Container classes and their interior dimensions (high-cube)."""

from dataclasses import dataclass
from typing import Dict, Tuple

from size_carton.core.errors import UnknownContainer


@dataclass(frozen=True)
class ContainerSpec:
    """
    Interior of a shipping container.

    Attributes:
        name:   Container class ("20ft", "40ft").
        width:  Interior width (mm), packing x-axis.
        height: Interior height (mm), packing y-axis.
        length: Interior length (mm), packing z-axis.
        volume: Interior volume (m³) as published for the class.
    """
    name: str
    width: float
    height: float
    length: float
    volume: float

    def usable_dimensions(self, shrink_factor: float) -> Tuple[float, float, float]:
        """Interior scaled down by the wall-clearance factor."""
        return (self.width * shrink_factor,
                self.height * shrink_factor,
                self.length * shrink_factor)

    def to_dict(self) -> dict:
        return {"name": self.name, "width": self.width, "height": self.height,
                "length": self.length, "volume": self.volume}

    @classmethod
    def from_dict(cls, d: dict) -> "ContainerSpec":
        return cls(**d)


CONTAINERS: Dict[str, ContainerSpec] = {
    "20ft": ContainerSpec("20ft", width=2340.0, height=2280.0, length=5898.0, volume=31.44),
    "40ft": ContainerSpec("40ft", width=2340.0, height=2585.0, length=12032.0, volume=64.15),
}

# Selected CBM above this recommends the larger container.
LARGE_CONTAINER_THRESHOLD_CBM = 27.0


def available_containers() -> Tuple[str, ...]:
    return tuple(CONTAINERS)


def get_container(name: str) -> ContainerSpec:
    """
    Look up a container class by name.

    Raises:
        UnknownContainer: If name is not a supported class.
    """
    try:
        return CONTAINERS[name]
    except KeyError:
        raise UnknownContainer(name, CONTAINERS) from None


def recommend_container(total_cbm: float) -> str:
    """Smallest container class suggested for the selected volume."""
    if total_cbm > LARGE_CONTAINER_THRESHOLD_CBM:
        return "40ft"
    return "20ft"
