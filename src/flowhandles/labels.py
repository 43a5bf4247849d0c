"""
Semantic labels and colours for branch anchors.

Maps a branch's semantic type to the text shown next to its anchor and a
colour token. Tokens are abstract ("green", "red", "neutral") and resolved to
concrete colours by the consumer: CSS variables for the editor, RGB tuples
for raster output.
"""

from dataclasses import dataclass
from typing import Dict, Optional, Tuple, Union

from .models import SemanticType
from .validation import LayoutError

GREEN = "green"
RED = "red"
NEUTRAL = "neutral"


@dataclass(frozen=True)
class SemanticLabel:
    """Display label and colour token for a semantic type."""

    display_label: str
    color_token: str


@dataclass(frozen=True)
class EdgeDecoration:
    """Stroke style and glyph for an edge leaving a labelled handle."""

    stroke: str
    stroke_width: int
    glyph: str


SEMANTIC_LABELS: Dict[SemanticType, SemanticLabel] = {
    SemanticType.YES: SemanticLabel("Yes", GREEN),
    SemanticType.NO: SemanticLabel("No", RED),
    SemanticType.SUCCESS: SemanticLabel("Success", GREEN),
    SemanticType.ERROR: SemanticLabel("Error", RED),
    SemanticType.DEFAULT: SemanticLabel("", NEUTRAL),
}

CSS_COLORS: Dict[str, str] = {
    GREEN: "var(--flow-green)",
    RED: "var(--destructive)",
    NEUTRAL: "var(--muted-foreground)",
}

RGB_COLORS: Dict[str, Tuple[int, int, int]] = {
    GREEN: (34, 197, 94),
    RED: (239, 68, 68),
    NEUTRAL: (113, 113, 122),
}

# Edges leaving a condition node's yes/no handles
EDGE_DECORATIONS: Dict[SemanticType, EdgeDecoration] = {
    SemanticType.YES: EdgeDecoration("#22c55e", 2, "✓"),
    SemanticType.NO: EdgeDecoration("#ef4444", 2, "✗"),
}


def resolve_semantic_type(
    semantic_type: Union[SemanticType, str, None]
) -> SemanticType:
    """
    Resolve a semantic type from an enum member, its string value or None.

    None resolves to DEFAULT.

    Raises:
        LayoutError: If the value is not a known semantic type.
    """
    if semantic_type is None:
        return SemanticType.DEFAULT
    if isinstance(semantic_type, SemanticType):
        return semantic_type
    try:
        return SemanticType(semantic_type)
    except ValueError:
        raise LayoutError(f"Unknown semantic type {semantic_type!r}") from None


def label(semantic_type: Union[SemanticType, str, None]) -> SemanticLabel:
    """Look up the display label and colour token of a semantic type."""
    return SEMANTIC_LABELS[resolve_semantic_type(semantic_type)]


def get_handle_label(semantic_type: Union[SemanticType, str, None]) -> str:
    return label(semantic_type).display_label


def get_semantic_color(semantic_type: Union[SemanticType, str, None]) -> str:
    """CSS colour for a semantic type, as used by the editor canvas."""
    return css_color(label(semantic_type).color_token)


def css_color(color_token: str) -> str:
    try:
        return CSS_COLORS[color_token]
    except KeyError:
        raise LayoutError(f"Unknown colour token {color_token!r}") from None


def rgb_color(color_token: str) -> Tuple[int, int, int]:
    try:
        return RGB_COLORS[color_token]
    except KeyError:
        raise LayoutError(f"Unknown colour token {color_token!r}") from None


def edge_decoration(source_handle: Optional[str]) -> Optional[EdgeDecoration]:
    """
    Stroke style for an edge, keyed by the handle it leaves from.

    Only the yes/no handles of condition nodes are decorated; any other
    handle id (including ids that are not semantic types) yields None.
    """
    if source_handle is None:
        return None
    try:
        semantic_type = SemanticType(source_handle)
    except ValueError:
        return None
    return EDGE_DECORATIONS.get(semantic_type)
