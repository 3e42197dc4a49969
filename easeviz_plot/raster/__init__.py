from .canvas import draw_vline, fill, hex_color, new_canvas
from .draw_lines import draw_polyline, draw_segments
from .draw_markers import draw_markers
from .draw_text import draw_text, text_size

__all__ = [
    "draw_markers",
    "draw_polyline",
    "draw_segments",
    "draw_text",
    "draw_vline",
    "fill",
    "hex_color",
    "new_canvas",
    "text_size",
]
