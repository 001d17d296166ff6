"""Store package value objects: package options, price ranges and resolution results."""
from typing import NamedTuple, Optional


class PackageOption(NamedTuple):
    package_size: str
    package_unit: str
    notes: Optional[str] = None

    @staticmethod
    def from_dict(data):
        '''Builds an option from a dict using either snake_case or camelCase keys.'''
        d = dict(data) if isinstance(data, dict) else {}
        return PackageOption(
            package_size=str(d.get("package_size", d.get("packageSize", ""))),
            package_unit=str(d.get("package_unit", d.get("packageUnit", ""))),
            notes=d.get("notes") or None,
        )

    def to_dict(self):
        d = {"package_size": self.package_size, "package_unit": self.package_unit}
        if self.notes:
            d["notes"] = self.notes
        return d


class PriceRange(NamedTuple):
    min: float
    max: float

    @staticmethod
    def from_dict(data):
        return PriceRange(min=float(data["min"]), max=float(data["max"]))

    def to_dict(self):
        return {"min": self.min, "max": self.max}


class PackageResolution:
    """Outcome of mapping a recipe quantity to something a store actually sells."""

    def __init__(self, package_size: str, package_unit: str, original_quantity: str,
                 notes: Optional[str] = None, matched_key: Optional[str] = None):
        self.package_size = package_size
        self.package_unit = package_unit
        self.original_quantity = original_quantity
        self.notes = notes
        self.matched_key = matched_key

    @property
    def matched(self) -> bool:
        return self.matched_key is not None

    def __eq__(self, other) -> bool:
        if not isinstance(other, PackageResolution):
            return NotImplemented
        return self.to_dict() == other.to_dict() and self.matched_key == other.matched_key

    def __str__(self) -> str:
        base = f"{self.package_size} {self.package_unit} (recipe: {self.original_quantity})"
        return f"{base} - {self.notes}" if self.notes else base

    __repr__ = __str__

    def to_dict(self):
        '''Notes are omitted entirely when the lookup fell back to the recipe quantity.'''
        d = {
            "package_size": self.package_size,
            "package_unit": self.package_unit,
            "original_quantity": self.original_quantity,
        }
        if self.notes is not None:
            d["notes"] = self.notes
        return d
