"""
Rich console reporter (Layer 3).

Same tree layout as the plain reporter, with colored status flags and
check/cross icons, using the Rich library.
"""

import rich.console as _rich_console
import rich.text as _rich_text

import bramble.core.results as results
import bramble.ui.base as base
import bramble.ui.icons as icons


class RichConsoleReporter(base.Reporter):
    """Rich console reporter with colors."""

    def __init__(
        self,
        console: _rich_console.Console | None = None,
        *,
        force_terminal: bool | None = None,
        no_color: bool = False,
    ) -> None:
        """
        Initialize the Rich reporter.

        Args:
            console: Rich Console instance (created if not provided).
            force_terminal: Force terminal mode even if not detected.
            no_color: Disable all colors.
        """
        super().__init__()
        self._console = console or _rich_console.Console(
            force_terminal=force_terminal,
            no_color=no_color,
            highlight=False,
        )

    @property
    def console(self) -> _rich_console.Console:
        return self._console

    def _write(self, text: str, style: str | None = None) -> None:
        # Text objects are printed verbatim, so `[` in names is never markup.
        self._console.print(_rich_text.Text(text, style=style or ""), end="")

    def _status_flag(self, status: results.Status) -> tuple[str, str]:
        text, style = super()._status_flag(status)
        return f"{icons.status_icon(status)}{text}", style
