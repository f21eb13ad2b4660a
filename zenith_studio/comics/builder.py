"""Comic Builder: excerpt-to-panels generation, commit, field and image edits."""

import math
from typing import List, Optional

from loguru import logger

from ..errors import FormValidationError
from ..generation.image import ImageGenerationClient
from ..generation.parsing import parse_panel_batch
from ..generation.prompts import (
    PANEL_SYSTEM,
    build_field_prompt,
    build_image_prompt,
    build_panel_prompt,
    build_style_guide_prompt,
)
from ..generation.text import TextGenerationClient
from ..models import REGENERABLE_FIELDS, Comic, DialogueLine, Panel, PanelDraft, StoryState
from ..models.comic import new_id
from ..utils.guard import GenerationGuard


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def compute_progress(old_count: int, new_count: int) -> int:
    """Progress after a commit. Not monotonic; 10 for the first batch."""
    if old_count == 0:
        return 10
    return round_half_up(min(100.0, new_count / (old_count * 1.5) * 100))


def summarize_last_panel(drafts: List[Panel], fallback: str) -> str:
    if not drafts:
        return fallback
    last = drafts[-1]
    if last.caption:
        return last.caption
    if last.dialogue and last.dialogue[0].line:
        return last.dialogue[0].line
    return last.observation or fallback


def normalize_field(field: str) -> str:
    """Accept both ``visualDescription`` and ``visual_description``."""
    snake = "".join(f"_{c.lower()}" if c.isupper() else c for c in field).lstrip("_")
    if snake not in REGENERABLE_FIELDS:
        raise FormValidationError(
            f"'{field}' is not an editable text field. Choose one of: {', '.join(REGENERABLE_FIELDS)}"
        )
    return snake


class PanelBuilder:
    def __init__(
        self,
        text_client: TextGenerationClient,
        image_client: Optional[ImageGenerationClient] = None,
    ):
        self.text_client = text_client
        self.image_client = image_client
        self.guard = GenerationGuard()

    def generate_panels(self, comic: Comic, excerpt: str) -> List[Panel]:
        """Draft panels for one excerpt. Nothing is saved."""
        if not excerpt or not excerpt.strip():
            raise FormValidationError("Please enter an excerpt first.")

        with self.guard.acquire("panel generation"):
            logger.info(f"Generating panels for '{comic.topic}' (excerpt {comic.story_state.completed_excerpts + 1})")
            raw = self.text_client.generate_json(
                build_panel_prompt(comic, excerpt),
                schema=list[PanelDraft],
                system=PANEL_SYSTEM,
            )
        drafts = [Panel(**draft.model_dump(), id=new_id()) for draft in parse_panel_batch(raw)]
        logger.success(f"Received {len(drafts)} draft panel(s)")
        return drafts

    @staticmethod
    def update_draft(drafts: List[Panel], panel: Panel) -> List[Panel]:
        """Swap ``panel`` in by id. Works for committed panels too."""
        if not any(p.id == panel.id for p in drafts):
            raise FormValidationError(f"Panel {panel.id} is not in this list.")
        return [panel if p.id == panel.id else p for p in drafts]

    # Manual edits. Each returns a new panel; nothing is saved here.

    @staticmethod
    def edit_field(panel: Panel, field: str, value: str) -> Panel:
        return panel.model_copy(update={normalize_field(field): value})

    @staticmethod
    def add_dialogue(panel: Panel, character: str, line: str) -> Panel:
        if not character.strip() or not line.strip():
            raise FormValidationError("A dialogue line needs both a character and a line.")
        entry = DialogueLine(character=character.strip(), line=line.strip())
        return panel.model_copy(update={"dialogue": [*panel.dialogue, entry]})

    @staticmethod
    def remove_dialogue(panel: Panel, number: int) -> Panel:
        """Drop the 1-based ``number``-th dialogue line."""
        if not 1 <= number <= len(panel.dialogue):
            raise FormValidationError(
                f"Dialogue line {number} does not exist (panel has {len(panel.dialogue)})."
            )
        dialogue = [d for i, d in enumerate(panel.dialogue, 1) if i != number]
        return panel.model_copy(update={"dialogue": dialogue})

    def finish_excerpt(self, comic: Comic, drafts: List[Panel]) -> Comic:
        """Commit drafts to the comic and return the updated comic."""
        if not drafts:
            raise FormValidationError("There are no draft panels to save.")
        if any(not p.visual_description for p in drafts):
            raise FormValidationError("Please fill at least the Visual Description for all panels.")

        panels = [*comic.panels, *drafts]
        updated = comic.model_copy(update={
            "panels": panels,
            "progress": compute_progress(len(comic.panels), len(panels)),
            "story_state": StoryState(
                last_panel_summary=summarize_last_panel(drafts, comic.story_state.last_panel_summary),
                completed_excerpts=comic.story_state.completed_excerpts + 1,
            ),
        })
        logger.info(f"Committed {len(drafts)} panel(s) to '{comic.topic}', progress {updated.progress}%")
        return updated

    def regenerate_field(self, comic: Comic, panel: Panel, field: str) -> Panel:
        name = normalize_field(field)
        with self.guard.acquire(f"{name} regeneration"):
            text = self.text_client.generate(build_field_prompt(comic, panel, name))
        return panel.model_copy(update={name: text.strip()})

    def generate_style_guide(self, comic: Comic) -> Comic:
        with self.guard.acquire("style guide"):
            text = self.text_client.generate(build_style_guide_prompt(comic))
        return comic.model_copy(update={"style_guide_prompt": text.strip()})

    def _require_images(self) -> ImageGenerationClient:
        if self.image_client is None:
            raise FormValidationError("No image generation backend is configured.")
        return self.image_client

    def render_panel(self, comic: Comic, panel: Panel) -> Optional[Panel]:
        """Generate the panel's image; None when the service returned no image."""
        client = self._require_images()
        if not panel.visual_description:
            raise FormValidationError("The panel needs a Visual Description before an image can be made.")
        with self.guard.acquire("image generation"):
            payload = client.generate(panel, comic)
        if payload is None:
            return None
        return panel.model_copy(update={
            "image_generation_prompt": build_image_prompt(panel, comic),
            "image_data": payload.data,
            "image_mime_type": payload.mime_type,
        })

    def edit_panel_image(self, panel: Panel, instruction: str) -> Optional[Panel]:
        client = self._require_images()
        prior = panel.image
        if prior is None or not instruction.strip():
            raise FormValidationError("An image must be generated and an edit instruction provided.")
        with self.guard.acquire("image edit"):
            payload = client.edit(prior, instruction, panel.image_generation_prompt)
        if payload is None:
            return None
        return panel.model_copy(update={
            "image_data": payload.data,
            "image_mime_type": payload.mime_type,
        })
