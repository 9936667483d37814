"""
Fit Calculator & Renderer
Sizes the wrapped headline to the canvas and emits the HTML/SVG document.
Font size is a character-count heuristic, not a glyph measurement.
"""

from pydantic import BaseModel
from typing import List, Optional, Sequence, Tuple

from headline_generator.config import LayoutSettings


class Layout(BaseModel):
    lines: Tuple[str, ...]
    font_size: float
    line_height: float
    total_height: float
    start_y: float

    model_config = {"frozen": True}

    def line_positions(self) -> List[float]:
        """Vertical anchor of every line, top to bottom"""
        return [self.start_y + i * self.line_height for i in range(len(self.lines))]


def compute_font_size(lines: Sequence[str], settings: LayoutSettings) -> float:
    # Clamp both divisors so an empty line list (or a single empty line) stays finite
    max_line_length = max((len(line) for line in lines), default=0) or 1
    line_count = len(lines) or 1

    return min(
        settings.font_ceiling,
        (settings.width_budget / max_line_length) * settings.compaction_factor,
        settings.height_budget / (line_count * settings.compaction_factor),
    )


def compute_layout(lines: Sequence[str], settings: Optional[LayoutSettings] = None) -> Layout:
    """Font size and vertical placement for a wrapped headline, centered on the canvas"""
    settings = settings or LayoutSettings()

    font_size = compute_font_size(lines, settings)
    line_height = font_size * settings.line_spacing_factor
    total_height = len(lines) * line_height
    start_y = (settings.canvas_size - total_height) / 2 + line_height / 2

    return Layout(
        lines=tuple(lines),
        font_size=font_size,
        line_height=line_height,
        total_height=total_height,
        start_y=start_y,
    )


def escape_html(text: str) -> str:
    # Ampersand first, otherwise the entities below get escaped twice
    return (
        text.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&#39;")
    )


def format_number(value: float) -> str:
    """Print numbers the way the browser-side worker did: 540 rather than 540.0"""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def render_text_line(line: str, y: float, font_size: float, center_x: float) -> str:
    return f"""
			<text 
				x="{format_number(center_x)}" 
				y="{format_number(y)}"
				font-family="Arial, sans-serif" 
				font-size="{format_number(font_size)}" 
				font-weight="bold"
				fill="white" 
				text-anchor="middle" 
				dominant-baseline="middle"
				stroke="black" 
				stroke-width="2">
				{escape_html(line)}
			</text>
		"""


def render_layout(layout: Layout, settings: Optional[LayoutSettings] = None) -> str:
    settings = settings or LayoutSettings()
    canvas = format_number(settings.canvas_size)
    center_x = settings.canvas_size / 2
    # Backing box spans the height budget, centered horizontally
    box_x = (settings.canvas_size - settings.height_budget) / 2

    text_elements = "".join(
        render_text_line(line, y, layout.font_size, center_x)
        for line, y in zip(layout.lines, layout.line_positions())
    )

    return f"""<!DOCTYPE html>
<html>
<head>
	<meta charset="UTF-8">
	<meta name="viewport" content="width={canvas}, height={canvas}, initial-scale=1.0">
	<style>
		body {{ 
			margin: 0; 
			padding: 0; 
			width: {canvas}px; 
			height: {canvas}px; 
			overflow: hidden;
		}}
		svg {{ 
			display: block; 
			width: {canvas}px; 
			height: {canvas}px;
			position: fixed;
			top: 0;
			left: 0;
		}}
	</style>
</head>
<body>
	<svg viewBox="0 0 {canvas} {canvas}" width="{canvas}" height="{canvas}" xmlns="http://www.w3.org/2000/svg">
		<!-- Background Image -->
		<image href="{escape_html(settings.background_url)}" width="{canvas}" height="{canvas}"/>
		
		<!-- Semi-transparent overlay -->
		<rect x="0" y="0" width="{canvas}" height="{canvas}" fill="rgba(0,0,0,0.4)"/>
		
		<!-- Text background for better readability -->
		<rect 
			x="{format_number(box_x)}" 
			y="{format_number(layout.start_y - layout.font_size)}" 
			width="{format_number(settings.height_budget)}" 
			height="{format_number(layout.total_height + layout.font_size)}" 
			fill="rgba(0,0,0,0.3)" 
			rx="10"
		/>
		
		<!-- Multi-line text -->
		{text_elements}
	</svg>
</body>
</html>"""


def render(lines: Sequence[str], settings: Optional[LayoutSettings] = None) -> str:
    """Lay out the wrapped lines and return the full HTML document"""
    settings = settings or LayoutSettings()
    return render_layout(compute_layout(lines, settings), settings)
