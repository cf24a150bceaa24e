from .canvas import RGBA, blit, coerce_color, fill_rect, new_canvas
from .draw_arcs import draw_arc
from .draw_lines import draw_line
from .draw_text import draw_text, text_size
from .surface import OverlayText, RasterSurface, compose_layers, save_png

__all__ = [
    "OverlayText",
    "RGBA",
    "RasterSurface",
    "blit",
    "coerce_color",
    "compose_layers",
    "draw_arc",
    "draw_line",
    "draw_text",
    "fill_rect",
    "new_canvas",
    "save_png",
    "text_size",
]
