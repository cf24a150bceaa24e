from __future__ import annotations

import logging

from planar_plot.config import CanvasOptions
from planar_plot.scales import require_size


LOGGER = logging.getLogger(__name__)

DEFAULT_SCREEN_FRACTION = 0.5


def resolve_canvas_size(
    options: CanvasOptions,
    parent_size: tuple[int, int] | None = None,
    *,
    screen_fraction: float = DEFAULT_SCREEN_FRACTION,
) -> tuple[int, int]:
    """Return the pixel size a new canvas should take.

    Fixed sizing uses the option dims. Fit-to-parent uses ``parent_size`` and,
    when there is none, a fraction of the detected screen; the option dims are
    the last fallback.
    """
    if not options.size_to_parent:
        return (options.initial_width, options.initial_height)
    if parent_size is not None:
        width, height = parent_size
        require_size(width, height)
        return (width, height)
    if screen_fraction <= 0:
        raise ValueError("screen_fraction must be > 0")

    screen = _detect_screen_size()
    if screen is None:
        LOGGER.debug("no screen detected; using %dx%d", options.initial_width, options.initial_height)
        return (options.initial_width, options.initial_height)
    sw, sh = screen
    return (max(1, int(sw * screen_fraction)), max(1, int(sh * screen_fraction)))


def _detect_screen_size() -> tuple[int, int] | None:
    try:
        import tkinter as tk

        root = tk.Tk()
        root.withdraw()
        width = int(root.winfo_screenwidth())
        height = int(root.winfo_screenheight())
        root.destroy()
        if width > 0 and height > 0:
            return (width, height)
    except Exception:
        return None
    return None
