from .comic import (
    Character,
    DialogueLine,
    PanelDraft,
    Panel,
    ImagePayload,
    StoryState,
    Comic,
    DraftBatch,
    REGENERABLE_FIELDS,
    new_id,
)
from .episode import (
    Phase,
    Turn,
    Episode,
)

__all__ = [
    "Character",
    "DialogueLine",
    "PanelDraft",
    "Panel",
    "ImagePayload",
    "StoryState",
    "Comic",
    "DraftBatch",
    "REGENERABLE_FIELDS",
    "new_id",
    "Phase",
    "Turn",
    "Episode",
]
