from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.theme import Theme

from ..config import UIConfig

LIGHT_THEME = Theme({
    "title": "bold blue",
    "label": "bold",
    "muted": "grey50",
    "phase": "magenta",
    "error": "bold red",
    "ok": "green",
})

DARK_THEME = Theme({
    "title": "bold bright_cyan",
    "label": "bold white",
    "muted": "grey62",
    "phase": "bright_magenta",
    "error": "bold bright_red",
    "ok": "bright_green",
})


def create_console(ui: UIConfig) -> Console:
    """Build the console once per session from the UI settings."""
    return Console(theme=DARK_THEME if ui.dark_mode else LIGHT_THEME)


def create_spinner(console: Console) -> Progress:
    return Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        TimeElapsedColumn(),
        console=console,
        transient=True,
    )
