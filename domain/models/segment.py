"""
Segment domain model.
"""

from dataclasses import dataclass


def display_color(index: int | float, total: int | float) -> str:
    """Evenly spaced hue for slot ``index`` of ``total`` (Pillow-compatible hsl string)."""
    hue = round((360 / total) * index) % 360
    return f"hsl({hue}, 70%, 55%)"


@dataclass
class Segment:
    """
    One angular slice of the wheel.

    Ordering within the wheel defines the slice's slot; labels and colors
    carry no uniqueness constraint.
    """

    label: str
    color: str | None = None  # None -> evenly spaced hue by position
    value: int = 0  # Points awarded when the wheel lands here

    def resolved_color(self, index: int, total: int) -> str:
        """Return the explicit color, or the default hue for this slot."""
        if self.color:
            return self.color
        return display_color(index, total)

    @classmethod
    def from_dict(cls, data: dict) -> "Segment":
        return cls(
            label=str(data.get("label", "")),
            color=data.get("color") or None,
            value=int(data.get("value", 0)),
        )

    def to_dict(self) -> dict:
        return {"label": self.label, "color": self.color, "value": self.value}
