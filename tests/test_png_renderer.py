"""Tests for the PNG renderer module."""

import os
import tempfile

from PIL import Image

from flowhandles import WorkflowLayout
from flowhandles.png_renderer import PNGRenderer, render_to_png


class TestPNGRenderer:
    """Tests for PNGRenderer class."""

    def test_render_linear(self, linear_workflow):
        """Render a simple chain to PNG."""
        renderer = PNGRenderer()

        with tempfile.NamedTemporaryFile(suffix=".png", delete=False) as f:
            output_path = f.name

        try:
            result = renderer.render(linear_workflow, output_path)
            assert result == output_path
            assert os.path.exists(output_path)
            assert os.path.getsize(output_path) > 0
        finally:
            if os.path.exists(output_path):
                os.unlink(output_path)

    def test_render_branching(self, branching_workflow, tmp_path):
        """Render condition branches and parallel edges."""
        output_path = str(tmp_path / "branching.png")
        PNGRenderer().render(branching_workflow, output_path)

        with Image.open(output_path) as img:
            assert img.format == "PNG"
            width, height = img.size
            # Four 220px-wide nodes spread over 620px, at scale 2
            assert width > 620 * 2
            assert height > 585 * 2

    def test_render_with_scale(self, fanout_workflow, tmp_path):
        """Render with a custom scale factor."""
        small = str(tmp_path / "small.png")
        large = str(tmp_path / "large.png")
        PNGRenderer(scale=1).render(fanout_workflow, small)
        PNGRenderer(scale=3).render(fanout_workflow, large)

        with Image.open(small) as a, Image.open(large) as b:
            assert b.size[0] > a.size[0] * 2

    def test_render_empty_workflow(self, tmp_path):
        """Render an empty workflow creates a placeholder image."""
        output_path = str(tmp_path / "empty.png")
        PNGRenderer().render(WorkflowLayout([], []), output_path)

        with Image.open(output_path) as img:
            assert img.size == (200, 100)

    def test_anchor_colors(self, branching_workflow, tmp_path):
        """Test yes/no anchors are painted in their semantic colours."""
        renderer = PNGRenderer(scale=1, margin=50)
        output_path = str(tmp_path / "colors.png")
        renderer.render(branching_workflow, output_path)

        # Canvas origin is the top-left of the drawing, shifted by the margin
        geometry = branching_workflow.geometry()
        yes = geometry.anchors["yes-edge"]
        origin = renderer._origin
        px = (round(yes.x - origin.x + 50), round(yes.y - origin.y + 50))

        with Image.open(output_path) as img:
            assert img.convert("RGB").getpixel(px) == (34, 197, 94)

    def test_render_keeps_layout_trace(self, branching_workflow, tmp_path):
        """Test rendering does not clear a trace recorded by the caller."""
        branching_workflow.compute(debug=True)
        trace = branching_workflow.get_trace()

        PNGRenderer().render(branching_workflow, str(tmp_path / "traced.png"))

        assert branching_workflow.get_trace() is trace
        assert trace.node_count == 4


class TestRenderToPng:
    """Tests for the render_to_png convenience function."""

    def test_render_to_png(self, linear_workflow, tmp_path):
        """Test kwargs are passed through to PNGRenderer."""
        output_path = str(tmp_path / "out.png")
        assert render_to_png(linear_workflow, output_path, scale=1) == output_path
        assert os.path.getsize(output_path) > 0
