"""Shared fixtures."""

import pytest
from unittest.mock import Mock

from zenith_studio.generation.text import TextGenerationClient
from zenith_studio.library import ComicLibrary, EpisodeLibrary
from zenith_studio.models import Character, Comic, DialogueLine, Episode, Panel
from zenith_studio.store import CollectionStore, LocalStorage


SAMPLE_TEXTBOOK = """
Neonatal jaundice is yellow discolouration of the skin and sclera caused by
accumulation of bilirubin. Physiological jaundice appears after 24 hours of
life, peaks on day 3-5 and resolves within two weeks in term babies.
Jaundice in the first 24 hours is always pathological until proven otherwise.
Management includes phototherapy and, in severe cases, exchange transfusion.
"""

PANEL_BATCH_JSON = """```json
[
  {
    "observation": "The baby's sclera are yellow at 18 hours of life.",
    "reasoning": "Jaundice before 24 hours is pathological.",
    "action": "Dr. Precious orders a serum bilirubin.",
    "expectation": "Tension rises as the result is awaited.",
    "visualDescription": "A newborn under bright ward lights, Dr. Precious leaning in.",
    "caption": "Day one, 18 hours old.",
    "suggestions": "Always check the timing of onset.",
    "dialogue": [{"character": "Dr. Precious", "line": "This is too early for physiological jaundice."}]
  },
  {
    "observation": "Bilirubin is above the phototherapy line.",
    "reasoning": "Treatment threshold is crossed.",
    "action": "Start phototherapy.",
    "expectation": "Relief",
    "visualDescription": "The baby under blue phototherapy light, eyes shielded.",
    "caption": "",
    "suggestions": "",
    "dialogue": [{"character": "Dr. Adetunji", "line": "Good call. Start phototherapy now."}]
  }
]
```"""


@pytest.fixture
def storage(tmp_path):
    return LocalStorage(tmp_path / "data")


@pytest.fixture
def comic_store(storage):
    return CollectionStore(storage, "zenith_comics", Comic)


@pytest.fixture
def episode_store(storage):
    return CollectionStore(storage, "zenith_episodes", Episode)


@pytest.fixture
def comic_library(comic_store):
    return ComicLibrary(comic_store)


@pytest.fixture
def episode_library(episode_store):
    return EpisodeLibrary(episode_store)


@pytest.fixture
def sample_comic():
    return Comic(
        subject="Paediatrics",
        topic="Neonatal Jaundice",
        ward="Special Care Baby Unit",
        characters=[
            Character(name="Dr. Precious", description="Intern (Female)"),
            Character(name="Dr. Adetunji", description="Consultant Paediatrician"),
        ],
    )


@pytest.fixture
def sample_panel():
    return Panel(
        observation="Yellow sclera",
        reasoning="Early jaundice",
        action="Check bilirubin",
        expectation="Worry",
        visual_description="A newborn under ward lights",
        caption="Hour 18",
        suggestions="Note the timing",
        dialogue=[DialogueLine(character="Dr. Precious", line="Too early.")],
    )


@pytest.fixture
def sample_episode():
    return Episode(episode_number=1, topic="Neonatal Jaundice", textbook_content=SAMPLE_TEXTBOOK)


@pytest.fixture
def text_client():
    """A stand-in for the Gemini client; tests set return values per call."""
    return Mock(spec=TextGenerationClient)


@pytest.fixture
def panel_batch_json():
    return PANEL_BATCH_JSON
