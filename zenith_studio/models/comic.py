"""Comic Builder data models."""

import uuid
from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def new_id() -> str:
    return str(uuid.uuid4())


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class CamelModel(BaseModel):
    """Base for persisted entities; JSON keys are camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_json_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class Character(CamelModel):
    name: str
    description: str = ""


class DialogueLine(CamelModel):
    character: str
    line: str


class PanelDraft(CamelModel):
    """A panel as the model writes it: no id, no image."""

    observation: str = ""
    reasoning: str = ""
    action: str = ""
    expectation: str = ""
    visual_description: str = ""
    caption: str = ""
    suggestions: str = ""
    dialogue: List[DialogueLine] = Field(default_factory=list)


class ImagePayload(CamelModel):
    data: str  # base64
    mime_type: str


class Panel(PanelDraft):
    id: str = Field(default_factory=new_id)
    image_generation_prompt: Optional[str] = None
    image_data: Optional[str] = None
    image_mime_type: Optional[str] = None

    @property
    def image(self) -> Optional[ImagePayload]:
        if self.image_data and self.image_mime_type:
            return ImagePayload(data=self.image_data, mime_type=self.image_mime_type)
        return None


# Fields a user may ask the model to rewrite one at a time.
REGENERABLE_FIELDS = (
    "observation",
    "reasoning",
    "action",
    "expectation",
    "visual_description",
    "caption",
    "suggestions",
)


class StoryState(CamelModel):
    last_panel_summary: str = ""
    completed_excerpts: int = Field(default=0, ge=0)


class Comic(CamelModel):
    id: str = Field(default_factory=new_id)
    subject: str
    topic: str
    ward: str
    characters: List[Character] = Field(default_factory=list)
    style_guide_prompt: Optional[str] = None
    story_state: StoryState = Field(default_factory=StoryState)
    panels: List[Panel] = Field(default_factory=list)
    progress: int = Field(default=0, ge=0, le=100)
    created_at: datetime = Field(default_factory=utc_now)


class DraftBatch(CamelModel):
    """Draft panels for one excerpt, kept until they are finished or discarded.

    ``id`` is the owning comic's id, so a comic has at most one batch.
    """

    id: str
    excerpt: str = ""
    panels: List[Panel] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utc_now)
