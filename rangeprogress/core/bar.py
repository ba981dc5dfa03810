"""
Progress Bar Drawing

Renders an absolute progress value as a fixed-width ASCII bar.
"""

from typing import Optional

from rangeprogress.config import get_config
from rangeprogress.exceptions import InvalidArgumentError

FULL_SYMBOL = "#"
EMPTY_SYMBOL = "-"


def render_bar(
    value: float,
    width: Optional[int] = None,
    full: str = FULL_SYMBOL,
    empty: str = EMPTY_SYMBOL,
) -> str:
    """
    Draw a progress bar such as ``[#####-----]``.

    Cell ``i`` of the interior is filled iff ``i / (width - 2) < value``.

    Args:
        value: Absolute progress, normally within [0, 1]
        width: Total width including the brackets (default from config)
        full: Symbol for filled cells
        empty: Symbol for empty cells

    Raises:
        InvalidArgumentError: If width leaves no room inside the brackets
    """
    if width is None:
        width = get_config().default_width
    if width <= 2:
        raise InvalidArgumentError(
            f"Width of progress must be greater than 2, because the beginning "
            f"and end already have \"[\" and \"]\" (got {width})"
        )

    cells = width - 2
    body = "".join(full if i / cells < value else empty for i in range(cells))
    return f"[{body}]"
