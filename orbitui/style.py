"""Style properties, CSS value parsing and the cascade applied to a style."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass, field
from typing import Any, ClassVar, Iterable, Optional

from orbitui.stylesheet import CssProperty, StyleError, StyleRule

_FLOAT_RE = re.compile(
    r"[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf|infinity|nan)",
    re.IGNORECASE,
)
_UNSIGNED_RE = re.compile(r"\+?\d+")
_SIGNED_RE = re.compile(r"[+-]?\d+")

_U8_MAX = 0xFF
_U16_MAX = 0xFFFF
_I32_MIN = -(2**31)
_I32_MAX = 2**31 - 1


def _parse_float(text: str) -> Optional[float]:
    if not _FLOAT_RE.fullmatch(text):
        return None
    return float(text)


def _parse_unsigned(text: str, maximum: int) -> Optional[int]:
    if not _UNSIGNED_RE.fullmatch(text):
        return None
    value = int(text)
    return value if value <= maximum else None


def _parse_i32(text: str) -> Optional[int]:
    if not _SIGNED_RE.fullmatch(text):
        return None
    value = int(text)
    return value if _I32_MIN <= value <= _I32_MAX else None


def _strip_prefix_all(text: str, prefix: str) -> str:
    while prefix and text.startswith(prefix):
        text = text[len(prefix):]
    return text


def _strip_suffix_all(text: str, suffix: str) -> str:
    while suffix and text.endswith(suffix):
        text = text[: -len(suffix)]
    return text


@dataclass(frozen=True)
class Color:
    """A colour in one of several CSS notations.

    ``model`` is one of ``rgba``, ``hex``, ``named``, ``hsl``,
    ``currentColor`` or ``transparent``.
    """

    model: str
    components: tuple[float, ...] = ()
    text: str = ""

    _ARITY: ClassVar[dict[str, int]] = {
        "rgba": 4,
        "hex": 0,
        "named": 0,
        "hsl": 4,
        "currentColor": 0,
        "transparent": 0,
    }

    def __post_init__(self) -> None:
        if self.model not in self._ARITY:
            raise ValueError(f"unknown colour model: {self.model!r}")
        if len(self.components) != self._ARITY[self.model]:
            raise ValueError(
                f"{self.model} colour needs {self._ARITY[self.model]} components"
            )

    @classmethod
    def rgba(cls, r: float, g: float, b: float, a: float = 1.0) -> "Color":
        """Red, green, blue and alpha, each from 0 to 1."""
        return cls("rgba", (r, g, b, a))

    @classmethod
    def hex(cls, code: str) -> "Color":
        """A ``#rrggbb``-style colour kept as written."""
        return cls("hex", text=code)

    @classmethod
    def named(cls, name: str) -> "Color":
        """A CSS colour keyword."""
        return cls("named", text=name)

    @classmethod
    def hsl(cls, h: float, s: float, l: float, a: float = 1.0) -> "Color":  # noqa: E741
        """Hue, saturation, lightness and alpha."""
        return cls("hsl", (h, s, l, a))

    @classmethod
    def current(cls) -> "Color":
        """The ``currentColor`` keyword."""
        return cls("currentColor")

    @classmethod
    def transparent(cls) -> "Color":
        """Fully transparent."""
        return cls("transparent")


class Visibility(enum.Enum):
    VISIBLE = "visible"
    HIDDEN = "hidden"
    COLLAPSE = "collapse"


class BorderStyle(enum.Enum):
    NONE = "none"
    SOLID = "solid"
    DASHED = "dashed"
    DOTTED = "dotted"
    DOUBLE = "double"
    GROOVE = "groove"
    RIDGE = "ridge"
    INSET = "inset"
    OUTSET = "outset"


@dataclass(frozen=True)
class BorderRadius:
    """Corner radii in pixels."""

    top_left: float = 0.0
    top_right: float = 0.0
    bottom_right: float = 0.0
    bottom_left: float = 0.0


@dataclass(frozen=True)
class EdgeColors:
    """Per-edge border colours."""

    top: Color
    right: Color
    bottom: Color
    left: Color


@dataclass(frozen=True)
class FontWeight:
    """A font weight: one of the keyword constants or a plain number.

    A keyword weight and a plain number of the same value are distinct.
    """

    weight: int
    keyword: Optional[str] = None

    THIN: ClassVar["FontWeight"]
    EXTRA_LIGHT: ClassVar["FontWeight"]
    LIGHT: ClassVar["FontWeight"]
    NORMAL: ClassVar["FontWeight"]
    MEDIUM: ClassVar["FontWeight"]
    SEMI_BOLD: ClassVar["FontWeight"]
    BOLD: ClassVar["FontWeight"]
    EXTRA_BOLD: ClassVar["FontWeight"]
    BLACK: ClassVar["FontWeight"]


FontWeight.THIN = FontWeight(100, "thin")
FontWeight.EXTRA_LIGHT = FontWeight(200, "extra-light")
FontWeight.LIGHT = FontWeight(300, "light")
FontWeight.NORMAL = FontWeight(400, "normal")
FontWeight.MEDIUM = FontWeight(500, "medium")
FontWeight.SEMI_BOLD = FontWeight(600, "semi-bold")
FontWeight.BOLD = FontWeight(700, "bold")
FontWeight.EXTRA_BOLD = FontWeight(800, "extra-bold")
FontWeight.BLACK = FontWeight(900, "black")

_FONT_WEIGHTS: dict[str, FontWeight] = {}
for _weight in (
    FontWeight.THIN,
    FontWeight.EXTRA_LIGHT,
    FontWeight.LIGHT,
    FontWeight.NORMAL,
    FontWeight.MEDIUM,
    FontWeight.SEMI_BOLD,
    FontWeight.BOLD,
    FontWeight.EXTRA_BOLD,
    FontWeight.BLACK,
):
    _FONT_WEIGHTS[_weight.keyword or ""] = _weight
    _FONT_WEIGHTS[str(_weight.weight)] = _weight
del _weight


@dataclass(frozen=True)
class FontStyle:
    """``normal``, ``italic`` or ``oblique`` with an angle in degrees."""

    kind: str = "normal"
    angle: float = 0.0

    NORMAL: ClassVar["FontStyle"]
    ITALIC: ClassVar["FontStyle"]

    def __post_init__(self) -> None:
        if self.kind not in ("normal", "italic", "oblique"):
            raise ValueError(f"unknown font style: {self.kind!r}")

    @classmethod
    def oblique(cls, angle: float) -> "FontStyle":
        return cls("oblique", angle)


FontStyle.NORMAL = FontStyle("normal")
FontStyle.ITALIC = FontStyle("italic")


class TextAlign(enum.Enum):
    LEFT = "left"
    RIGHT = "right"
    CENTER = "center"
    JUSTIFY = "justify"
    START = "start"
    END = "end"


class TextDecoration(enum.Enum):
    NONE = "none"
    UNDERLINE = "underline"
    OVERLINE = "overline"
    LINE_THROUGH = "line-through"
    BLINK = "blink"


class TextTransform(enum.Enum):
    NONE = "none"
    CAPITALIZE = "capitalize"
    UPPERCASE = "uppercase"
    LOWERCASE = "lowercase"


@dataclass(frozen=True)
class Point2D:
    x: float = 0.0
    y: float = 0.0


@dataclass(frozen=True)
class Transform:
    """A CSS transform function; angles are in degrees.

    ``multiple`` holds other transforms in ``args``.
    """

    kind: str
    args: tuple = ()

    _ARITY: ClassVar[dict[str, int]] = {
        "none": 0,
        "matrix": 6,
        "translate": 2,
        "translate_x": 1,
        "translate_y": 1,
        "scale": 2,
        "scale_x": 1,
        "scale_y": 1,
        "rotate": 1,
        "skew_x": 1,
        "skew_y": 1,
    }

    def __post_init__(self) -> None:
        if self.kind == "multiple":
            if not all(isinstance(item, Transform) for item in self.args):
                raise ValueError("multiple transform takes only transforms")
            return
        if self.kind not in self._ARITY:
            raise ValueError(f"unknown transform: {self.kind!r}")
        if len(self.args) != self._ARITY[self.kind]:
            raise ValueError(f"{self.kind} takes {self._ARITY[self.kind]} arguments")

    @classmethod
    def none(cls) -> "Transform":
        return cls("none")

    @classmethod
    def multiple(cls, *transforms: "Transform") -> "Transform":
        return cls("multiple", tuple(transforms))


class StepPosition(enum.Enum):
    START = "start"
    END = "end"


@dataclass(frozen=True)
class TimingFunction:
    """An animation timing function.

    ``cubic_bezier`` takes four numbers; ``steps`` takes a count and a
    :class:`StepPosition`.
    """

    kind: str
    args: tuple = ()

    _ARITY: ClassVar[dict[str, int]] = {
        "linear": 0,
        "ease": 0,
        "ease_in": 0,
        "ease_out": 0,
        "ease_in_out": 0,
        "cubic_bezier": 4,
        "steps": 2,
    }

    def __post_init__(self) -> None:
        if self.kind not in self._ARITY:
            raise ValueError(f"unknown timing function: {self.kind!r}")
        if len(self.args) != self._ARITY[self.kind]:
            raise ValueError(f"{self.kind} takes {self._ARITY[self.kind]} arguments")
        if self.kind == "steps":
            count, position = self.args
            if not isinstance(position, StepPosition) or count < 0:
                raise ValueError("steps takes a non-negative count and a StepPosition")

    @classmethod
    def cubic_bezier(cls, x1: float, y1: float, x2: float, y2: float) -> "TimingFunction":
        return cls("cubic_bezier", (x1, y1, x2, y2))

    @classmethod
    def steps(cls, count: int, position: StepPosition) -> "TimingFunction":
        return cls("steps", (count, position))


@dataclass(frozen=True)
class BoxShadow:
    offset_x: float
    offset_y: float
    blur_radius: float
    spread_radius: float
    color: Color
    inset: bool = False


@dataclass(frozen=True)
class TextShadow:
    offset_x: float
    offset_y: float
    blur_radius: float
    color: Color


@dataclass(frozen=True)
class Filter:
    """A CSS filter function.

    ``drop_shadow`` takes an x offset, a y offset, a blur radius and a
    :class:`Color`; every other kind takes one number.
    """

    kind: str
    args: tuple = ()

    _KINDS: ClassVar[frozenset[str]] = frozenset(
        {
            "blur",
            "brightness",
            "contrast",
            "drop_shadow",
            "grayscale",
            "hue_rotate",
            "invert",
            "opacity",
            "saturate",
            "sepia",
        }
    )

    def __post_init__(self) -> None:
        if self.kind not in self._KINDS:
            raise ValueError(f"unknown filter: {self.kind!r}")
        if self.kind == "drop_shadow":
            if len(self.args) != 4 or not isinstance(self.args[3], Color):
                raise ValueError("drop_shadow takes x, y, blur and a Color")
        elif len(self.args) != 1:
            raise ValueError(f"{self.kind} takes 1 argument")


class CursorType(enum.Enum):
    AUTO = "auto"
    DEFAULT = "default"
    NONE = "none"
    CONTEXT_MENU = "context-menu"
    HELP = "help"
    POINTER = "pointer"
    PROGRESS = "progress"
    WAIT = "wait"
    CELL = "cell"
    CROSSHAIR = "crosshair"
    TEXT = "text"
    VERTICAL_TEXT = "vertical-text"
    ALIAS = "alias"
    COPY = "copy"
    MOVE = "move"
    NO_DROP = "no-drop"
    NOT_ALLOWED = "not-allowed"
    GRAB = "grab"
    GRABBING = "grabbing"
    E_RESIZE = "e-resize"
    N_RESIZE = "n-resize"
    NE_RESIZE = "ne-resize"
    NW_RESIZE = "nw-resize"
    S_RESIZE = "s-resize"
    SE_RESIZE = "se-resize"
    SW_RESIZE = "sw-resize"
    W_RESIZE = "w-resize"
    EW_RESIZE = "ew-resize"
    NS_RESIZE = "ns-resize"
    NESW_RESIZE = "nesw-resize"
    NWSE_RESIZE = "nwse-resize"
    COL_RESIZE = "col-resize"
    ROW_RESIZE = "row-resize"
    ALL_SCROLL = "all-scroll"
    ZOOM_IN = "zoom-in"
    ZOOM_OUT = "zoom-out"


@dataclass
class Style:
    """CSS-like style properties of a UI element; unset properties are None."""

    background_color: Optional[Color] = None
    color: Optional[Color] = None
    opacity: Optional[float] = None
    visibility: Optional[Visibility] = None

    border_width: Any = None
    border_color: Optional[EdgeColors] = None
    border_style: Optional[BorderStyle] = None
    border_radius: Optional[BorderRadius] = None

    font_family: Optional[str] = None
    font_size: Optional[float] = None
    font_weight: Optional[FontWeight] = None
    font_style: Optional[FontStyle] = None
    line_height: Optional[float] = None
    letter_spacing: Optional[float] = None
    text_align: Optional[TextAlign] = None
    text_decoration: Optional[TextDecoration] = None
    text_transform: Optional[TextTransform] = None

    layout_style: Any = None

    transform: Optional[Transform] = None
    transform_origin: Optional[Point2D] = None

    transition_property: Optional[list[str]] = None
    transition_duration: Optional[float] = None
    transition_timing_function: Optional[TimingFunction] = None
    transition_delay: Optional[float] = None

    box_shadow: Optional[list[BoxShadow]] = None
    text_shadow: Optional[list[TextShadow]] = None

    filter: Optional[list[Filter]] = None
    backdrop_filter: Optional[list[Filter]] = None
    z_index: Optional[int] = None
    cursor: Optional[CursorType] = None

    computed_hash: Optional[int] = None
    is_dirty: bool = False

    def merge(self, other: "Style") -> None:
        """Take ``other``'s colour and background colour where it sets them."""
        if other.color is not None:
            self.color = other.color
        if other.background_color is not None:
            self.background_color = other.background_color

    def is_animatable(self) -> bool:
        """Whether any animatable property is set."""
        return any(
            value is not None
            for value in (
                self.opacity,
                self.background_color,
                self.color,
                self.transform,
                self.border_radius,
                self.font_size,
                self.transition_duration,
            )
        )


def _parse_channel(text: str, name: str) -> float:
    value = _parse_unsigned(text.strip(), _U8_MAX)
    if value is None:
        raise StyleError(f"Invalid {name} value")
    return value / 255.0


def parse_color(value: str) -> Color:
    """Parse a CSS colour: hex, ``rgb()``, ``rgba()``, keywords or a name."""
    value = value.strip()
    if value.startswith("#"):
        return Color.hex(value)
    if value.startswith("rgb("):
        parts = _strip_suffix_all(_strip_prefix_all(value, "rgb("), ")").split(",")
        if len(parts) != 3:
            raise StyleError("Invalid RGB format")
        r, g, b = (
            _parse_channel(part, name) for part, name in zip(parts, ("red", "green", "blue"))
        )
        return Color.rgba(r, g, b, 1.0)
    if value.startswith("rgba("):
        parts = _strip_suffix_all(_strip_prefix_all(value, "rgba("), ")").split(",")
        if len(parts) != 4:
            raise StyleError("Invalid RGBA format")
        r, g, b = (
            _parse_channel(part, name)
            for part, name in zip(parts[:3], ("red", "green", "blue"))
        )
        alpha = _parse_float(parts[3].strip())
        if alpha is None:
            raise StyleError("Invalid alpha value")
        return Color.rgba(r, g, b, alpha)
    if value == "transparent":
        return Color.transparent()
    if value == "currentColor":
        return Color.current()
    return Color.named(value)


_UNITS = (("px", 1.0, "pixel"), ("pt", 1.333, "point"), ("em", 16.0, "em"))


def parse_font_size(value: str) -> Optional[float]:
    """Font size in pixels from ``px``, ``pt``, ``em`` or a bare number; None if invalid."""
    value = value.strip()
    for suffix, factor, _ in _UNITS:
        if value.endswith(suffix):
            number = _parse_float(_strip_suffix_all(value, suffix))
            return None if number is None else number * factor
    return _parse_float(value)


def parse_font_weight(value: str) -> FontWeight:
    """Parse a font-weight keyword or number."""
    weight = _FONT_WEIGHTS.get(value.strip())
    if weight is not None:
        return weight
    numeric = _parse_unsigned(value, _U16_MAX)
    if numeric is None:
        raise StyleError(f"Invalid font weight: {value}")
    return FontWeight(numeric)


def parse_text_align(value: str) -> TextAlign:
    """Parse a text-align keyword."""
    try:
        return TextAlign(value.strip())
    except ValueError:
        raise StyleError(f"Invalid text align: {value}") from None


def parse_length(value: str) -> float:
    """Length in pixels from ``px``, ``pt``, ``em`` or a bare number."""
    value = value.strip()
    for suffix, factor, label in _UNITS:
        if value.endswith(suffix):
            number = _parse_float(_strip_suffix_all(value, suffix))
            if number is None:
                raise StyleError(f"Invalid {label} value")
            return number * factor
    number = _parse_float(value)
    if number is None:
        raise StyleError("Invalid length value")
    return number


def parse_border_radius(value: str) -> BorderRadius:
    """Parse one, two or four radii separated by whitespace."""
    parts = value.split()
    if len(parts) == 1:
        radius = parse_length(parts[0])
        return BorderRadius(radius, radius, radius, radius)
    if len(parts) == 2:
        first = parse_length(parts[0])
        second = parse_length(parts[1])
        return BorderRadius(first, second, first, second)
    if len(parts) == 4:
        return BorderRadius(*(parse_length(part) for part in parts))
    raise StyleError("Invalid border radius format")


def apply_css_property(style: Style, prop: CssProperty) -> None:
    """Set the style property named by ``prop``; unknown names are ignored."""
    name, value = prop.name, prop.value
    if name == "color":
        style.color = parse_color(value)
    elif name == "background-color":
        style.background_color = parse_color(value)
    elif name == "opacity":
        style.opacity = _parse_float(value)
    elif name == "font-size":
        style.font_size = parse_font_size(value)
    elif name == "font-weight":
        style.font_weight = parse_font_weight(value)
    elif name == "font-family":
        style.font_family = value
    elif name == "text-align":
        style.text_align = parse_text_align(value)
    elif name == "border-radius":
        style.border_radius = parse_border_radius(value)
    elif name == "z-index":
        style.z_index = _parse_i32(value)


def apply_css_rules(style: Style, rules: Iterable[StyleRule]) -> None:
    """Apply rules in order of specificity, then source order; later ones win."""
    ordered = sorted(rules, key=lambda rule: (rule.specificity, rule.source_order))
    for rule in ordered:
        for selector in rule.selectors:
            for prop in selector.properties:
                apply_css_property(style, prop)


def inherit_style(style: Style, parent_style: Style) -> None:
    """Copy inheritable text properties from the parent where ``style`` leaves them unset."""
    for name in (
        "font_family",
        "font_size",
        "font_weight",
        "color",
        "line_height",
        "letter_spacing",
        "text_align",
    ):
        if getattr(style, name) is None:
            setattr(style, name, getattr(parent_style, name))