from .generator import EpisodeGenerator
from .phases import (
    PENDING_TO_PREVIOUS,
    PENDING_TO_REVIEW,
    PANEL_TRIGGER,
    AutoStart,
    UserInput,
    GenerationStarted,
    GenerationSucceeded,
    GenerationFailed,
    GenerationCancelled,
    MarkComplete,
    RequestGeneration,
    Persist,
    Transition,
    needs_auto_start,
    transition,
)

__all__ = [
    "EpisodeGenerator",
    "PENDING_TO_PREVIOUS",
    "PENDING_TO_REVIEW",
    "PANEL_TRIGGER",
    "AutoStart",
    "UserInput",
    "GenerationStarted",
    "GenerationSucceeded",
    "GenerationFailed",
    "GenerationCancelled",
    "MarkComplete",
    "RequestGeneration",
    "Persist",
    "Transition",
    "needs_auto_start",
    "transition",
]
