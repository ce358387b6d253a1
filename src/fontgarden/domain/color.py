"""RGBA color annotations in the UFO "r,g,b,a" string format."""

from dataclasses import dataclass


def _format_channel(value: float) -> str:
    text = f"{value:.3f}".rstrip("0").rstrip(".")
    return text or "0"


@dataclass(frozen=True, slots=True)
class Color:
    """A color with red, green, blue and alpha channels in [0, 1].

    Channels are rounded to three decimal places on construction, so a color
    always equals the one parsed back from its string form.

    Attributes:
        red: Red channel
        green: Green channel
        blue: Blue channel
        alpha: Alpha channel
    """

    red: float
    green: float
    blue: float
    alpha: float

    def __post_init__(self) -> None:
        for channel in (self.red, self.green, self.blue, self.alpha):
            if not 0.0 <= channel <= 1.0:
                raise ValueError(f"color channel {channel} out of range [0, 1]")
        for name in ("red", "green", "blue", "alpha"):
            object.__setattr__(self, name, round(float(getattr(self, name)), 3))

    @classmethod
    def from_string(cls, text: str) -> "Color":
        """Parse a color from its "r,g,b,a" string form.

        Args:
            text: Comma separated channel values

        Returns:
            Color instance

        Raises:
            ValueError: If the text is not four numbers in [0, 1]
        """
        parts = text.split(",")
        if len(parts) != 4:
            raise ValueError(f"expected 4 comma separated channels, got {len(parts)}")
        red, green, blue, alpha = (float(part.strip()) for part in parts)
        return cls(red, green, blue, alpha)

    def to_rgba_string(self) -> str:
        """Render as "r,g,b,a", limited to three decimal places.

        Returns:
            Canonical color string
        """
        return ",".join(
            _format_channel(channel)
            for channel in (self.red, self.green, self.blue, self.alpha)
        )

    def __str__(self) -> str:
        return self.to_rgba_string()
