"""Single-line terminal bar chart of the smoothed spectrum."""

import numpy as np

BAR_CHARS = " ▁▂▃▄▅▆▇█"
DEFAULT_WIDTH = 72


def compress(values, width: int) -> np.ndarray:
    """Reduce `values` to at most `width` columns, keeping each group's peak."""
    v = np.asarray(values, dtype=np.float64)
    if len(v) <= width:
        return v
    groups = np.array_split(v, width)
    return np.array([g.max() for g in groups])


def format_bars(smooth, smear=None, width: int = DEFAULT_WIDTH) -> str:
    """Render the curve as block characters, one per column.

    Columns that have dropped to zero while the smear track is still
    lit show a dot instead of a blank.
    """
    levels = len(BAR_CHARS) - 1
    cols = np.clip(compress(smooth, width), 0.0, 1.0)
    idx = np.round(cols * levels).astype(int)
    chars = [BAR_CHARS[i] for i in idx]
    if smear is not None:
        trail = np.clip(compress(smear, width), 0.0, 1.0)
        for i, (s, t) in enumerate(zip(idx, np.round(trail * levels).astype(int))):
            if s == 0 and t > 0:
                chars[i] = "·"
    return "".join(chars)


def render_console(smooth, smear=None, width: int = DEFAULT_WIDTH):
    print(f"\r|{format_bars(smooth, smear, width)}|", end="", flush=True)
