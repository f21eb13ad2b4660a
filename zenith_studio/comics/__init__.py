from .builder import (
    PanelBuilder,
    compute_progress,
    normalize_field,
    round_half_up,
    summarize_last_panel,
)

__all__ = [
    "PanelBuilder",
    "compute_progress",
    "normalize_field",
    "round_half_up",
    "summarize_last_panel",
]
