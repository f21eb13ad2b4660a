"""Prompt templates for the text and image models."""

from ..models import Comic, Episode, Panel

MASTER_PROMPT = """# ZENITH TEACHING HOSPITAL: MEDICAL DRAMA COMIC GENERATOR

## SYSTEM OVERVIEW
This system transforms medical textbook content into long-form, serialized medical drama episodes. Each episode is a complete narrative that:
- Teaches ALL content from the textbook section comprehensively
- Features compelling character-driven drama at Grey's Anatomy quality level
- Maintains continuity across episodes with evolving relationships and storylines
- Is engaging enough for non-medical readers while being educationally complete
- Can be adapted into comic panels for visual learning

Core principle: Drama first, medicine seamlessly integrated.

## YOUR ROLE
You are a professional television writer creating a serialized medical drama. You have access to this master prompt, a growing character database, medical textbook content that must be woven into each episode, and the user's creative direction.

## EXECUTION WORKFLOW FOR EACH EPISODE REQUEST

### PHASE 1: INTAKE & ANALYSIS
Acknowledge receipt (topic, episode number, content volume, estimated length). Analyse the medical content: pathophysiology, risk factors, presentation, diagnosis, management, complications, prevention, common pitfalls. Review the established cast and identify any new characters needed.

### PHASE 2: STORY ARC PROPOSAL
Present a complete story arc proposal BEFORE writing:
- EPISODE [X]: [COMPELLING TITLE] and MEDICAL TOPIC
- MAIN MEDICAL PLOT (patient profile, presentation, complications, teaching opportunities)
- SUBPLOT A (relationship drama), SUBPLOT B (workplace conflict), SUBPLOT C (comic relief)
- FEATURED CHARACTERS, SUPPORTING CHARACTERS, NEW CHARACTERS NEEDED
- ONGOING ARC CONTINUATIONS and NEW ARCS INTRODUCED
- EPISODE STRUCTURE: COLD OPEN, ACT 1-4, TAG SCENE, ESTIMATED LENGTH
End by asking whether the arc works: APPROVE, MODIFY, or provide NEW CHARACTER NAMES.

CRITICAL: DO NOT PROCEED TO WRITING until the user approves the arc and provides any needed character names.

### PHASE 3: FULL EPISODE WRITING
Once approved, generate the complete episode following all guidelines in this document.

### PHASE 4: POST-EPISODE DELIVERABLES
After the episode, provide:
4.1 Episode summary (word count, scenes, reading time, medical content covered).
4.2 Character database update, introduced by exactly this heading line:
📊 CHARACTER DATABASE UPDATE
listing new information per character, new relationships, relationship changes, ongoing arc status and new arcs.
4.3 Offer the comic panel breakdown: 'Reply "Generate panels" when ready.'

### PHASE 5: COMIC PANEL BREAKDOWN (When Requested)
For every panel give: PANEL #N - SCENE, Location, Time, Characters Present, Camera Angle, VISUAL DESCRIPTION, KEY DIALOGUE, MEDICAL DETAIL SHOWN, EMOTIONAL BEAT, CATEGORY (ESSENTIAL / DRAMATIC / EDUCATIONAL / CHARACTER MOMENT).

## THE UNIVERSE
Setting: Zenith Teaching Hospital, Lagos.

Consultants: Dr. Aituma (O&G), Dr. Adetunji (Paediatrics), Dr. Emeka (Psychiatry), "Master" (Paediatric Surgeon)
Administration: Dr. Victor (CMD), Uju (Accountant), Rachael (IT)
Nursing: Nurse Chidinma (Senior Nurse)
Registrars: Dr. Gregory
Interns: Dr. Precious (F), Dr. Glory (F), Dr. Ese (F), Dr. Addy (F), Dr. Efua (M), Dr. Harry (M), Dr. Douglas (M), Dr. Black (M), Dr. Osahon (M)
Family/recurring: Patricia (Precious' mother)

## STORY GENERATION PROTOCOL
Episode structure (mandatory): COLD OPEN, ACT 1: SETUP, ACT 2: COMPLICATIONS, ACT 3: CRISIS, ACT 4: RESOLUTION, TAG SCENE.

Scene format (use exactly this):
INT./EXT. LOCATION - SPECIFIC AREA - TIME OF DAY

[SCENE DESCRIPTION: 2-5 sentences setting mood, who's present, what's happening, sensory details]

CHARACTER NAME: (action or emotion in parentheses) Dialogue here.
"""


def build_initial_episode_prompt(episode: Episode) -> str:
    return (
        f"EPISODE NUMBER: {episode.episode_number}\n"
        f"TOPIC: {episode.topic}\n\n"
        "Here is the textbook content for this episode:\n\n"
        "---\n"
        f"{episode.textbook_content}\n"
        "---\n\n"
        "Begin with Phase 1 (intake & analysis) and then present the Phase 2 story arc proposal. "
        "Do not write the episode yet."
    )


PANEL_SYSTEM = """You are a medical educator and comic script writer for Zenith Teaching Hospital. You turn textbook excerpts into comic panels that teach clinical reasoning.

Every panel carries both an educational layer and a visual layer:
- observation: what the clinician notices
- reasoning: how they interpret it
- action: what they do next
- expectation: the expected outcome and the mood of the moment
- visualDescription: what the illustrator must draw
- caption: short narration box text (may be empty)
- dialogue: spoken lines, each with the speaking character's name
- suggestions: corrections or teaching notes for the reader

Only use characters from the cast you are given. Continue the story from where it left off."""


def _cast_lines(comic: Comic) -> str:
    return "\n".join(f"- {c.name}: {c.description}" for c in comic.characters)


def build_panel_prompt(comic: Comic, excerpt: str) -> str:
    return (
        f"## Comic\nSubject: {comic.subject}\nTopic: {comic.topic}\nWard: {comic.ward}\n\n"
        f"## Cast\n{_cast_lines(comic)}\n\n"
        f"## Story So Far\nExcerpts completed: {comic.story_state.completed_excerpts}\n"
        f"Last moment: {comic.story_state.last_panel_summary}\n\n"
        f"## New Excerpt\n{excerpt}\n\n"
        "Turn this excerpt into a sequence of 2-6 comic panels. "
        "Return a JSON array of panel objects only."
    )


FIELD_LABELS = {
    "observation": "Observation",
    "reasoning": "Reasoning",
    "action": "Action",
    "expectation": "Expectation",
    "visual_description": "Visual Description",
    "caption": "Caption",
    "suggestions": "Suggestions/Corrections",
}


def _panel_lines(panel: Panel) -> str:
    lines = [f"{label}: {getattr(panel, field)}" for field, label in FIELD_LABELS.items()]
    for d in panel.dialogue:
        lines.append(f'Dialogue - {d.character}: "{d.line}"')
    return "\n".join(lines)


def build_field_prompt(comic: Comic, panel: Panel, field: str) -> str:
    label = FIELD_LABELS[field]
    return (
        f"{PANEL_SYSTEM}\n\n"
        f"## Comic\nSubject: {comic.subject}\nTopic: {comic.topic}\nWard: {comic.ward}\n\n"
        f"## Cast\n{_cast_lines(comic)}\n\n"
        f"## Story So Far\n{comic.story_state.last_panel_summary}\n\n"
        f"## Current Panel\n{_panel_lines(panel)}\n\n"
        f"Rewrite only the \"{label}\" of this panel so it fits the rest of the panel better. "
        f"Reply with the new {label} text only: no label, no quotes, no JSON."
    )


def build_style_guide_prompt(comic: Comic) -> str:
    return (
        "Write a concise visual style guide for an educational medical comic. "
        "It will be prefixed to every image prompt, so it must keep characters and rendering consistent.\n\n"
        f"Subject: {comic.subject}\nTopic: {comic.topic}\nSetting: {comic.ward}, Zenith Teaching Hospital, Lagos\n\n"
        f"## Cast\n{_cast_lines(comic)}\n\n"
        "Cover: art style, colour palette, line work, lighting, and for every cast member a fixed "
        "physical description (age, build, skin tone, hair, clothing, distinguishing features). "
        "Reply with the style guide text only."
    )


def build_image_prompt(panel: Panel, comic: Comic) -> str:
    parts = []
    if comic.style_guide_prompt:
        parts.append(comic.style_guide_prompt.strip())
    parts.append(
        "A single comic book panel, medical drama, Zenith Teaching Hospital, Lagos. "
        f"Setting: {comic.ward}."
    )
    parts.append(f"Scene: {panel.visual_description}")
    if panel.action:
        parts.append(f"Action: {panel.action}")
    if panel.expectation:
        parts.append(f"Mood: {panel.expectation}")
    if panel.dialogue:
        spoken = "; ".join(f'{d.character} says "{d.line}"' for d in panel.dialogue)
        parts.append(f"Dialogue in speech bubbles: {spoken}")
    if comic.characters:
        roster = "; ".join(
            f"{c.name} ({c.description})" if c.description else c.name for c in comic.characters
        )
        parts.append(f"Characters: {roster}")
    return "\n".join(parts)


def build_edited_image_prompt(prompt: str, instruction: str) -> str:
    return f"{prompt}\nEdit: {instruction.strip()}"
