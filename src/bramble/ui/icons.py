"""
Icon utilities for consistent terminal display.

Unicode icons render at different widths across terminals and fonts.
Padding uses Rich's cell_len so status flags line up.
"""

import rich.cells as _rich_cells

import bramble.core.results as results

# =============================================================================
# Icon Constants
# =============================================================================

ICON_SUCCESS = "✓"       # Passed
ICON_FAILURE = "✗"       # Failed, errored or aborted
ICON_SKIPPED = "∅"       # Never entered

# Default target width for icon + padding (in terminal cells)
DEFAULT_ICON_WIDTH = 2


def cell_ljust(text: str, width: int) -> str:
    """Left-justify text to a cell width (pad on right).

    Like str.ljust() but uses terminal cell width instead of character count.
    """
    current = _rich_cells.cell_len(text)
    return text + " " * max(0, width - current)


def status_icon(status: results.Status) -> str:
    """Padded icon for a result status."""
    if status is results.Status.PASSED:
        icon = ICON_SUCCESS
    elif status is results.Status.SKIPPED:
        icon = ICON_SKIPPED
    else:
        icon = ICON_FAILURE
    return cell_ljust(icon, DEFAULT_ICON_WIDTH)
