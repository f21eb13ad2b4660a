"""Turn raw model text into entity fields."""

import json
import re
from typing import Dict, List

from pydantic import ValidationError

from ..errors import InvalidOutputError
from ..models import PanelDraft, Phase

_FENCE_RE = re.compile(r"^```(?:\w+)?\s*\n?(.*?)\n?\s*```$", re.DOTALL)

# Heading the master prompt asks the model to open its post-episode
# character notes with. Everything from its last occurrence onward is the
# character database update.
CHARACTER_DB_SEPARATOR = "📊 CHARACTER DATABASE UPDATE"


def strip_code_fence(text: str) -> str:
    cleaned = text.strip()
    m = _FENCE_RE.match(cleaned)
    if m:
        return m.group(1).strip()
    return cleaned


def parse_panel_batch(text: str) -> List[PanelDraft]:
    """Parse a JSON array of panels; the whole batch is rejected on any flaw."""
    cleaned = strip_code_fence(text or "")
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise InvalidOutputError(f"AI returned invalid JSON: {e}") from e
    if not isinstance(data, list):
        raise InvalidOutputError("AI response is not an array of panels.")
    if not data:
        raise InvalidOutputError("AI returned no panels.")
    try:
        return [PanelDraft.model_validate(item) for item in data]
    except ValidationError as e:
        raise InvalidOutputError(f"AI returned a malformed panel: {e}") from e


def split_episode_script(text: str):
    """Return ``(script, character_update)``; the update is None without a separator."""
    idx = text.rfind(CHARACTER_DB_SEPARATOR)
    if idx == -1:
        return text, None
    return text[:idx], text[idx:]


class EpisodeResponseParser:
    """Maps a finished pending phase and its response to episode fields."""

    def parse(self, phase: Phase, text: str) -> Dict[str, str]:
        if phase is Phase.ARC_PROPOSAL_PENDING:
            return {"story_arc_proposal": text}
        if phase is Phase.EPISODE_WRITING_PENDING:
            script, update = split_episode_script(text)
            fields = {"full_episode_script": script}
            if update is not None:
                fields["character_database_update"] = update
            return fields
        if phase is Phase.PANEL_BREAKDOWN_PENDING:
            return {"panel_breakdown": text}
        raise ValueError(f"No response fields for phase {phase.value}")
