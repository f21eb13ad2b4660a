"""In-memory collections kept in lockstep with their store."""

from typing import Generic, List, Optional, TypeVar

from loguru import logger

from .errors import FormValidationError
from .models import Character, Comic, DraftBatch, Episode, StoryState
from .store import CollectionStore

T = TypeVar("T", Comic, Episode, DraftBatch)


class Library(Generic[T]):
    """Owns one collection of works; every mutation is written through."""

    def __init__(self, store: CollectionStore[T]):
        self.store = store
        self.items: List[T] = self._ordered(store.load())

    def _commit(self, items: List[T]) -> None:
        self.items = self._ordered(items)
        self.store.save(self.items)

    def _ordered(self, items: List[T]) -> List[T]:
        return list(items)

    def get(self, item_id: Optional[str]) -> Optional[T]:
        if not item_id:
            return None
        return next((item for item in self.items if item.id == item_id), None)

    def add(self, item: T) -> T:
        self._commit([*self.items, item])
        return item

    def update(self, item: T) -> T:
        if self.get(item.id) is None:
            logger.warning(f"Update for unknown id {item.id} ignored")
            return item
        self._commit([item if existing.id == item.id else existing for existing in self.items])
        return item

    def delete(self, item_id: str) -> None:
        self._commit([item for item in self.items if item.id != item_id])

    def clear(self) -> None:
        self._commit([])


def validate_cast(characters: List[Character]) -> List[Character]:
    """Reject an empty cast or a repeated name; blank names are dropped."""
    seen = set()
    unique = []
    for char in characters:
        name = char.name.strip()
        if not name:
            continue
        if name in seen:
            raise FormValidationError(f"'{name}' is already in the cast.")
        seen.add(name)
        unique.append(char.model_copy(update={"name": name}))
    if not unique:
        raise FormValidationError("Please add at least one character.")
    return unique


class ComicLibrary(Library[Comic]):

    def create(
        self,
        subject: str,
        topic: str,
        ward: str,
        characters: List[Character],
        initial_excerpt: str,
    ) -> Comic:
        if not all(s.strip() for s in (subject, topic, ward, initial_excerpt)):
            raise FormValidationError("Please fill in all fields to start a new comic.")
        comic = Comic(
            subject=subject,
            topic=topic,
            ward=ward,
            characters=validate_cast(characters),
            story_state=StoryState(
                last_panel_summary=initial_excerpt[:100] + "...",
                completed_excerpts=0,
            ),
        )
        logger.info(f"Created comic '{topic}' ({comic.id})")
        return self.add(comic)


class EpisodeLibrary(Library[Episode]):
    """Episodes are numbered max+1 and always kept sorted by number."""

    def _ordered(self, items: List[Episode]) -> List[Episode]:
        return sorted(items, key=lambda e: e.episode_number)

    def next_episode_number(self) -> int:
        return max((e.episode_number for e in self.items), default=0) + 1

    def create(self, topic: str, textbook_content: str) -> Episode:
        if not topic.strip() or not textbook_content.strip():
            raise FormValidationError("Please provide both a topic and the textbook content.")
        episode = Episode(
            episode_number=self.next_episode_number(),
            topic=topic,
            textbook_content=textbook_content,
        )
        logger.info(f"Created episode {episode.episode_number} '{topic}' ({episode.id})")
        return self.add(episode)


class DraftLibrary(Library[DraftBatch]):
    """Uncommitted draft panels, one batch per comic."""

    def put(self, batch: DraftBatch) -> DraftBatch:
        if self.get(batch.id) is None:
            return self.add(batch)
        return self.update(batch)

    def replace_panels(self, batch: DraftBatch, panels) -> DraftBatch:
        return self.update(batch.model_copy(update={"panels": list(panels)}))
