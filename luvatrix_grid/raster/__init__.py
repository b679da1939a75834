from .canvas import new_canvas
from .compose import rasterize_elements
from .draw_lines import draw_ring, draw_segment
from .draw_text import draw_label, label_mask

__all__ = [
    "draw_label",
    "draw_ring",
    "draw_segment",
    "label_mask",
    "new_canvas",
    "rasterize_elements",
]
