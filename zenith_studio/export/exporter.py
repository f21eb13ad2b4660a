import json
import re
from pathlib import Path
from typing import Literal, Type, TypeVar, Union

from loguru import logger

from ..models import Comic, Episode

W = TypeVar("W", Comic, Episode)


def comic_to_markdown(comic: Comic) -> str:
    md = f"# {comic.topic}\n\n"
    md += f"**Subject:** {comic.subject}\n"
    md += f"**Ward:** {comic.ward}\n"
    md += f"**Characters:** {', '.join(c.name for c in comic.characters)}\n\n"

    for index, panel in enumerate(comic.panels, 1):
        md += f"## Panel {index}\n\n"
        if panel.image_data and panel.image_mime_type:
            md += (
                f"![Visual Description: {panel.visual_description}]"
                f"(data:{panel.image_mime_type};base64,{panel.image_data})\n\n"
            )
        md += f"**Visual Description:** {panel.visual_description}\n\n"

        if panel.caption:
            md += f"**Caption:** {panel.caption}\n\n"

        if panel.dialogue:
            md += "**Dialogue:**\n"
            for d in panel.dialogue:
                md += f'*   **{d.character}:** "{d.line}"\n'
            md += "\n"

        md += f"*   **Observation:** {panel.observation}\n"
        md += f"*   **Reasoning:** {panel.reasoning}\n"
        md += f"*   **Action:** {panel.action}\n"
        md += f"*   **Expectation:** {panel.expectation}\n"
        md += f"*   **Suggestions/Corrections:** {panel.suggestions}\n\n"

    return md


def episode_to_markdown(episode: Episode) -> str:
    md = f"# Episode {episode.episode_number}: {episode.topic}\n\n"
    md += f"**Created:** {episode.created_at.isoformat()}\n"
    md += f"**Phase:** {episode.generation_phase.value}\n\n"

    sections = [
        ("Story Arc Proposal", episode.story_arc_proposal),
        ("Full Episode Script", episode.full_episode_script),
        ("Character Database Update", episode.character_database_update),
        ("Panel Breakdown", episode.panel_breakdown),
    ]
    for title, body in sections:
        if body:
            md += f"## {title}\n\n{body.strip()}\n\n"

    md += f"## Textbook Content\n\n{episode.textbook_content.strip()}\n"
    return md


def dump_json(work: Union[Comic, Episode]) -> str:
    """Structured dump in the persisted (camelCase) shape."""
    return json.dumps(work.to_json_dict(), indent=2, ensure_ascii=False)


def load_json(text: str, model: Type[W]) -> W:
    return model.model_validate_json(text)


def export_filename(work: Union[Comic, Episode], suffix: str) -> str:
    stem = re.sub(r"\s+", "_", work.topic.strip()) or work.id
    if isinstance(work, Episode):
        stem = f"episode_{work.episode_number}_{stem}"
    return f"{stem}.{suffix}"


def export_work(
    work: Union[Comic, Episode],
    format: Literal["md", "json"],
    output_dir: Path,
) -> Path:
    """Write ``work`` to ``output_dir`` and return the file path."""
    if format == "json":
        content = dump_json(work)
    elif format == "md":
        content = comic_to_markdown(work) if isinstance(work, Comic) else episode_to_markdown(work)
    else:
        raise ValueError(f"Unknown format: {format}")

    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / export_filename(work, format)
    path.write_text(content, encoding="utf-8")
    logger.success(f"Exported '{work.topic}' to {path}")
    return path
