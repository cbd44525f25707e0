"""Threshold classification of composite values into bands."""

from dataclasses import dataclass
from typing import Union

from .results import ConfigurationError

Label = Union[str, int, float]


@dataclass(frozen=True)
class Classification:
    """
    Ordered (lower_bound_inclusive, label) pairs, lowest bound first.

    Bounds must strictly increase, so adjacent bands always touch and no
    value can fall between two of them.
    """

    name: str
    bands: tuple[tuple[float, Label], ...]

    def __post_init__(self):
        bands = tuple((float(bound), label) for bound, label in self.bands)
        if not bands:
            raise ConfigurationError(f"Classification '{self.name}' has no bands")
        for (low, _), (high, _) in zip(bands, bands[1:]):
            if high <= low:
                raise ConfigurationError(
                    f"Classification '{self.name}' bounds must strictly increase ({low:g} then {high:g})"
                )
        object.__setattr__(self, "bands", bands)

    @classmethod
    def from_mapping(cls, name: str, table: dict) -> "Classification":
        """Build from {lower_bound: label}, in any key order."""
        return cls(name, tuple(sorted(table.items())))

    @property
    def labels(self) -> tuple[Label, ...]:
        return tuple(label for _, label in self.bands)

    @property
    def lowest(self) -> Label:
        return self.bands[0][1]


def classify(value: float, table: Classification) -> Label:
    """
    Get the band label for a value.

    Scans from the highest bound down and returns the first band whose
    lower bound does not exceed the value. Values below every bound get
    the lowest-tier label.
    """
    for bound, label in reversed(table.bands):
        if bound <= value:
            return label
    return table.lowest
