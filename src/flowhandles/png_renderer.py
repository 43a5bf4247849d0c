"""
PNG Renderer module for laid-out workflows.

Rasterizes node boxes, anchors, edge curves and branch labels as a
high-resolution PNG image.
"""

import logging
import math
import os
from typing import List, Optional, Tuple

from PIL import Image, ImageDraw, ImageFont

from .labels import edge_decoration, label, rgb_color
from .models import AnchorPoint, NodeGeometry, Point
from .workflow import WorkflowGeometry, WorkflowLayout

logger = logging.getLogger(__name__)

Color = Tuple[int, int, int]


class PNGRenderer:
    """Renders workflow canvases as PNG images."""

    def __init__(
        self,
        scale: int = 2,  # For high-resolution output
        margin: int = 50,
        shadow_offset: int = 5,
        handle_radius: int = 8,
        font_size: int = 11,
        font_path: Optional[str] = None,
        curve_steps: int = 24,
    ):
        self.scale = scale
        self.margin = margin
        self.shadow_offset = shadow_offset
        self.handle_radius = handle_radius
        self.font_size = font_size
        self.font_path = font_path
        self.curve_steps = curve_steps

        # Colors
        self.bg_color: Color = (250, 251, 252)
        self.box_fill: Color = (255, 255, 255)
        self.box_outline: Color = (0, 0, 0)
        self.shadow_color: Color = (160, 160, 160)
        self.text_color: Color = (0, 0, 0)
        self.line_color: Color = (100, 100, 110)

        self.font = None
        self._origin = Point(0, 0)

    def _get_font(self) -> ImageFont.FreeTypeFont:
        """Get a font for rendering text."""
        if self.font is not None:
            return self.font

        font_size = self.font_size * self.scale
        font_options = [
            "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
            "/usr/share/fonts/truetype/liberation/LiberationSans-Regular.ttf",
            "/usr/share/fonts/truetype/freefont/FreeSans.ttf",
        ]
        if self.font_path:
            font_options.insert(0, self.font_path)

        for path in font_options:
            if os.path.exists(path):
                try:
                    self.font = ImageFont.truetype(path, font_size)
                    return self.font
                except OSError:
                    continue

        # Fallback to default font
        self.font = ImageFont.load_default()
        return self.font

    def _to_canvas(self, point: Point) -> Tuple[float, float]:
        """Translate a workflow coordinate to image pixels."""
        return (
            (point.x - self._origin.x + self.margin) * self.scale,
            (point.y - self._origin.y + self.margin) * self.scale,
        )

    def _bounds(
        self, workflow: WorkflowLayout, geometry: WorkflowGeometry
    ) -> Tuple[Point, Point]:
        """Bounding box of every box, shadow, anchor and curve."""
        xs: List[float] = []
        ys: List[float] = []
        for node in workflow.nodes.values():
            g = node.geometry
            xs.extend([g.x, g.x2 + self.shadow_offset])
            ys.extend([g.y, g.bottom_y + self.shadow_offset])
        for distribution in geometry.distributions.values():
            for anchor in distribution.anchors:
                r = self.handle_radius
                xs.extend([anchor.x - r, anchor.x + r])
                ys.extend([anchor.y - r, anchor.y + r])
        for curve in geometry.curves.values():
            for p in curve.sample(self.curve_steps):
                xs.append(p.x)
                ys.append(p.y)
        return Point(min(xs), min(ys)), Point(max(xs), max(ys))

    def render(
        self, workflow: WorkflowLayout, output_path: str = "workflow.png"
    ) -> str:
        """
        Render the workflow as a PNG image.

        Args:
            workflow: WorkflowLayout to lay out and draw
            output_path: Path to save the PNG file

        Returns:
            Path to the saved PNG file
        """
        if not workflow.nodes:
            # Create a small placeholder image
            img = Image.new("RGB", (200, 100), self.bg_color)
            img.save(output_path)
            return output_path

        geometry = workflow.geometry()
        low, high = self._bounds(workflow, geometry)
        self._origin = low
        canvas_width = math.ceil((high.x - low.x + self.margin * 2) * self.scale)
        canvas_height = math.ceil((high.y - low.y + self.margin * 2) * self.scale)

        img = Image.new("RGB", (canvas_width, canvas_height), self.bg_color)
        draw = ImageDraw.Draw(img)

        # Draw shadows first
        for node in workflow.nodes.values():
            self._draw_hatched_shadow(draw, node.geometry)

        for node_id, node in workflow.nodes.items():
            self._draw_box(draw, node.geometry, f"{node_id}\n{node.kind.value}")

        for edge in workflow.edges:
            self._draw_curve(draw, geometry, edge.id, edge.source_handle)

        for distribution in geometry.distributions.values():
            for anchor in distribution.anchors:
                self._draw_anchor(draw, anchor)

        img.save(output_path, "PNG", dpi=(300, 300))
        logger.info(
            "Rendered %d node(s) to %s (%dx%d)",
            len(workflow.nodes),
            output_path,
            canvas_width,
            canvas_height,
        )
        return output_path

    def _draw_hatched_shadow(
        self, draw: ImageDraw.ImageDraw, geometry: NodeGeometry
    ) -> None:
        """Draw a shadow effect using a checkerboard pattern."""
        x, y = self._to_canvas(Point(geometry.x, geometry.y))
        w = geometry.width * self.scale
        h = geometry.height * self.scale
        s = self.shadow_offset * self.scale

        # Size of each "pixel" in the checkerboard pattern
        pixel_size = max(2, self.scale)

        def draw_checkerboard(region_x, region_y, region_w, region_h):
            row = 0
            for py in range(int(region_y), int(region_y + region_h), pixel_size):
                col = 0
                for px in range(int(region_x), int(region_x + region_w), pixel_size):
                    if (row + col) % 2 == 0:
                        draw.rectangle(
                            [px, py, px + pixel_size - 1, py + pixel_size - 1],
                            fill=self.shadow_color,
                        )
                    col += 1
                row += 1

        # Right strip includes the corner; bottom strip stops before it
        draw_checkerboard(x + w, y + s, s, h)
        draw_checkerboard(x + s, y + h, w - s, s)

    def _draw_box(
        self, draw: ImageDraw.ImageDraw, geometry: NodeGeometry, text: str
    ) -> None:
        """Draw a box with border and centered text."""
        line_width = max(1, self.scale)
        x, y = self._to_canvas(Point(geometry.x, geometry.y))
        w = geometry.width * self.scale
        h = geometry.height * self.scale

        draw.rectangle(
            [x, y, x + w, y + h],
            fill=self.box_fill,
            outline=self.box_outline,
            width=line_width,
        )

        font = self._get_font()
        bbox = draw.multiline_textbbox((0, 0), text, font=font, align="center")
        text_w = bbox[2] - bbox[0]
        text_h = bbox[3] - bbox[1]
        draw.multiline_text(
            (x + (w - text_w) / 2, y + (h - text_h) / 2),
            text,
            fill=self.text_color,
            font=font,
            align="center",
        )

    def _draw_curve(
        self,
        draw: ImageDraw.ImageDraw,
        geometry: WorkflowGeometry,
        edge_id: str,
        source_handle: Optional[str],
    ) -> None:
        """Draw an edge curve as a polyline ending in an arrowhead."""
        curve = geometry.curves[edge_id]
        decoration = edge_decoration(source_handle)
        if decoration is None:
            color = self.line_color
            width = max(1, self.scale)
        else:
            color = decoration.stroke
            width = decoration.stroke_width * self.scale

        points = [self._to_canvas(p) for p in curve.sample(self.curve_steps)]
        draw.line(points, fill=color, width=width, joint="curve")
        self._draw_arrowhead(draw, points[-2], points[-1], color)

        if decoration is not None:
            mid = self._to_canvas(curve.point_at(0.5))
            draw.text(mid, decoration.glyph, fill=color, font=self._get_font())

    def _draw_arrowhead(
        self,
        draw: ImageDraw.ImageDraw,
        from_point: Tuple[float, float],
        to_point: Tuple[float, float],
        color,
    ) -> None:
        """Draw an arrowhead at the end of a line."""
        x1, y1 = from_point
        x2, y2 = to_point

        arrow_size = 8 * self.scale
        angle = math.atan2(y2 - y1, x2 - x1)
        angle1 = angle + math.pi * 0.8
        angle2 = angle - math.pi * 0.8

        ax1 = x2 + arrow_size * math.cos(angle1)
        ay1 = y2 + arrow_size * math.sin(angle1)
        ax2 = x2 + arrow_size * math.cos(angle2)
        ay2 = y2 + arrow_size * math.sin(angle2)

        draw.polygon([(x2, y2), (ax1, ay1), (ax2, ay2)], fill=color)

    def _draw_anchor(self, draw: ImageDraw.ImageDraw, anchor: AnchorPoint) -> None:
        """Draw an anchor circle with its semantic colour and label."""
        semantic = label(anchor.semantic_type)
        color = rgb_color(semantic.color_token)
        cx, cy = self._to_canvas(anchor.position)
        r = self.handle_radius * self.scale / 2

        draw.ellipse(
            [cx - r, cy - r, cx + r, cy + r],
            fill=color,
            outline=self.box_fill,
            width=max(1, self.scale),
        )
        if anchor.label:
            draw.text(
                (cx + r * 1.5, cy + r), anchor.label, fill=color, font=self._get_font()
            )


def render_to_png(
    workflow: WorkflowLayout, output_path: str = "workflow.png", **kwargs
) -> str:
    """
    Convenience function to render a workflow to PNG.

    Args:
        workflow: WorkflowLayout to render
        output_path: Path to save the PNG file
        **kwargs: Additional parameters for PNGRenderer

    Returns:
        Path to the saved PNG file
    """
    renderer = PNGRenderer(**kwargs)
    return renderer.render(workflow, output_path)
