import abc
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple


def color_tuple_to_hex(color: Tuple[int, int, int]) -> str:
    """Convert an (R, G, B) tuple to a hex color string."""
    return "#{:02x}{:02x}{:02x}".format(color[0], color[1], color[2])


def hex_to_color_tuple(hex_color: str) -> Tuple[int, int, int]:
    """Convert a hex color string to an (R, G, B) tuple."""
    hex_color = hex_color.lstrip("#")
    return (int(hex_color[0:2], 16), int(hex_color[2:4], 16), int(hex_color[4:6], 16))


def blend(
    color: Tuple[int, int, int], background: Tuple[int, int, int], alpha: float
) -> Tuple[int, int, int]:
    """Composite ``color`` over ``background`` with the given opacity."""
    alpha = min(max(alpha, 0.0), 1.0)
    return (
        int(round(color[0] * alpha + background[0] * (1 - alpha))),
        int(round(color[1] * alpha + background[1] * (1 - alpha))),
        int(round(color[2] * alpha + background[2] * (1 - alpha))),
    )


BACKGROUND_COLOR = "#f5f5f5"  # raywhite
OUTLINE_COLOR = "#000000"
TEXT_COLOR = "#000000"
NARRATION_COLOR = "#004158"  # darkblue

EDGE_COLORS = {
    "left": "#fdf900",  # yellow
    "right": "#0079f1",  # blue
    "highlighted": "#e62937",  # red
}


class Palette(abc.ABC):
    """Maps a display tag ("normal", "cursor", ...) to a node fill color."""

    @abc.abstractmethod
    def get_color_tuple(self, tag: str) -> Tuple[int, int, int]:
        pass

    def get_color_hex(self, tag: str, opacity: float = 1.0) -> str:
        """Get the hex fill for a tag, faded toward the background by opacity."""
        color_tuple = self.get_color_tuple(tag)
        if opacity < 1.0:
            color_tuple = blend(
                color_tuple, hex_to_color_tuple(BACKGROUND_COLOR), opacity
            )
        return color_tuple_to_hex(color_tuple)


class MappingPalette(Palette):
    """Palette backed by a tag -> hex color mapping.

    Args:
        colors: Mapping of tag names to hex colors
        fallback: Color used for tags missing from the mapping
    """

    def __init__(self, colors: Mapping[str, str], fallback: str = "#c8c8c8"):
        if not colors:
            raise ValueError("colors must not be empty")
        for tag, value in colors.items():
            try:
                hex_to_color_tuple(value)
            except (ValueError, IndexError):
                raise ValueError(f"Invalid hex color for tag '{tag}': {value!r}")
        self.colors = dict(colors)
        self.fallback = fallback

    def get_color_tuple(self, tag: str) -> Tuple[int, int, int]:
        return hex_to_color_tuple(self.colors.get(tag, self.fallback))


_PALETTES: Dict[str, Dict[str, str]] = {
    "classic": {
        "normal": "#c8c8c8",  # lightgray
        "cursor": "#ffa100",  # orange
        "found": "#00e430",  # green
        "flash_on": "#e62937",  # red
        "flash_off": "#c8c8c8",
    },
    "high_contrast": {
        "normal": "#ffffff",
        "cursor": "#ff8800",
        "found": "#008800",
        "flash_on": "#cc0000",
        "flash_off": "#ffffff",
    },
    "grayscale": {
        "normal": "#d0d0d0",
        "cursor": "#808080",
        "found": "#404040",
        "flash_on": "#202020",
        "flash_off": "#d0d0d0",
    },
}


def list_palette_names() -> List[str]:
    """List all available palette names."""
    return sorted(_PALETTES)


def get_palette(name: str) -> MappingPalette:
    """Create a palette instance by name.

    Raises:
        ValueError: If palette name is not found

    Example:
        >>> get_palette("classic").get_color_hex("cursor")
        '#ffa100'
    """
    if name not in _PALETTES:
        raise ValueError(
            f"Palette '{name}' not found. "
            f"Available palettes: {', '.join(list_palette_names())}"
        )
    return MappingPalette(_PALETTES[name])


def resolve_palette(
    palette_input: Optional[Any] = None,
    default_palette: str = "classic",
) -> Callable[[str, float], str]:
    """Resolve a palette input to a callable ``(tag, opacity) -> hex``.

    Args:
        palette_input: Can be:
            - None: Use the default palette
            - str: Palette name (e.g., 'classic', 'grayscale')
            - Mapping[str, str]: Tag to hex color mapping
            - Palette instance: Use its get_color_hex method
            - Callable[[str, float], str]: Use directly

    Raises:
        ValueError: If the palette name or mapping is invalid
        TypeError: If the input is not a valid type
    """
    if palette_input is None:
        palette_input = default_palette

    if isinstance(palette_input, str):
        return get_palette(palette_input).get_color_hex
    elif isinstance(palette_input, Palette):
        return palette_input.get_color_hex
    elif isinstance(palette_input, Mapping):
        return MappingPalette(palette_input).get_color_hex
    elif callable(palette_input):
        return palette_input
    raise TypeError(
        f"palette must be None, str, Mapping, Palette, or Callable[[str, float], str], "
        f"got {type(palette_input).__name__}"
    )


def edge_color(side: str, highlighted: bool) -> str:
    if highlighted:
        return EDGE_COLORS["highlighted"]
    return EDGE_COLORS.get(side, OUTLINE_COLOR)
