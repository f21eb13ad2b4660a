"""Episode Builder data models."""

from datetime import datetime
from enum import Enum
from typing import List, Literal, Optional

from pydantic import Field

from .comic import CamelModel, new_id, utc_now


class Phase(str, Enum):
    START = "start"
    ARC_PROPOSAL_PENDING = "arc_proposal_pending"
    ARC_PROPOSAL_REVIEW = "arc_proposal_review"
    EPISODE_WRITING_PENDING = "episode_writing_pending"
    EPISODE_REVIEW = "episode_review"
    PANEL_BREAKDOWN_PENDING = "panel_breakdown_pending"
    PANEL_BREAKDOWN_REVIEW = "panel_breakdown_review"
    COMPLETE = "complete"

    @property
    def is_pending(self) -> bool:
        return self.value.endswith("_pending")


class Turn(CamelModel):
    role: Literal["user", "model"]
    text: str


class Episode(CamelModel):
    id: str = Field(default_factory=new_id)
    episode_number: int = Field(ge=1)
    topic: str
    textbook_content: str
    created_at: datetime = Field(default_factory=utc_now)
    generation_phase: Phase = Phase.START
    history: List[Turn] = Field(default_factory=list)
    story_arc_proposal: Optional[str] = None
    full_episode_script: Optional[str] = None
    character_database_update: Optional[str] = None
    panel_breakdown: Optional[str] = None
    error: Optional[str] = None
