"""Runs the episode phase machine against the text model and the library."""

from typing import Optional, Set

from loguru import logger

from ..config import EpisodeConfig
from ..errors import GenerationError
from ..generation.parsing import EpisodeResponseParser
from ..generation.prompts import MASTER_PROMPT
from ..generation.text import TextGenerationClient
from ..library import EpisodeLibrary
from ..models import Episode, Phase
from ..utils.guard import GenerationGuard
from .phases import (
    AutoStart,
    Event,
    GenerationCancelled,
    GenerationFailed,
    GenerationStarted,
    GenerationSucceeded,
    MarkComplete,
    PENDING_TO_PREVIOUS,
    Persist,
    Transition,
    UserInput,
    needs_auto_start,
    transition,
)


class EpisodeGenerator:
    """Drives one episode at a time through arc, script and panel breakdown."""

    def __init__(
        self,
        library: EpisodeLibrary,
        client: TextGenerationClient,
        config: Optional[EpisodeConfig] = None,
        parser: Optional[EpisodeResponseParser] = None,
    ):
        self.library = library
        self.client = client
        self.config = config or EpisodeConfig()
        self.parser = parser or EpisodeResponseParser()
        self.guard = GenerationGuard()
        self._auto_started: Set[str] = set()

    @property
    def busy(self) -> bool:
        return self.guard.busy

    def _apply(self, episode: Episode, event: Event) -> Transition:
        result = transition(
            episode,
            event,
            parser=self.parser,
            failure_phase=self.config.failure_phase,
        )
        if any(isinstance(e, Persist) for e in result.effects):
            self.library.update(result.episode)
        return result

    def advance(self, episode: Episode, target: Phase, prompt: str) -> Episode:
        """Enter ``target``, ask the model, and land in the matching review phase.

        The pending phase is persisted before the call. On failure the
        episode moves to the configured failure phase with ``error`` set and
        its history untouched. A stale or interrupted call puts the episode
        back in the phase it was in, so it never stays ``_pending``.
        """
        with self.guard.acquire("episode generation") as ticket:
            previous = episode.generation_phase
            episode = self._apply(episode, GenerationStarted(target)).episode
            logger.info(f"Episode {episode.episode_number}: {target.value}")

            try:
                response = self.client.chat(MASTER_PROMPT, episode.history, prompt)
            except GenerationError as e:
                if not self.guard.is_current(ticket):
                    logger.warning(f"Discarding stale failure for episode {episode.episode_number}")
                    return self._apply(episode, GenerationCancelled(target, previous)).episode
                logger.error(f"Episode {episode.episode_number} generation failed: {e}")
                return self._apply(episode, GenerationFailed(target, str(e), previous)).episode
            except BaseException:
                logger.warning(f"Episode {episode.episode_number}: {target.value} interrupted")
                self._apply(episode, GenerationCancelled(target, previous))
                raise

            if not self.guard.is_current(ticket):
                logger.warning(f"Discarding stale response for episode {episode.episode_number}")
                return self._apply(episode, GenerationCancelled(target, previous)).episode

            result = self._apply(episode, GenerationSucceeded(target, prompt, response))
            logger.success(
                f"Episode {episode.episode_number}: now in {result.episode.generation_phase.value}"
            )
            return result.episode

    def auto_start(self, episode: Episode) -> Episode:
        """Request the arc proposal for a fresh episode, at most once per episode."""
        if episode.id in self._auto_started or not needs_auto_start(episode):
            return episode
        self._auto_started.add(episode.id)
        request = transition(episode, AutoStart()).request
        return self.advance(episode, request.target, request.prompt)

    def respond(self, episode: Episode, text: str) -> Episode:
        request = transition(episode, UserInput(text)).request
        if request is None:
            logger.debug(
                f"Input ignored in phase {episode.generation_phase.value} for episode {episode.episode_number}"
            )
            return episode
        return self.advance(episode, request.target, request.prompt)

    def complete(self, episode: Episode) -> Episode:
        return self._apply(episode, MarkComplete()).episode

    def recover(self, episode: Episode) -> Episode:
        """Release an episode left in a pending phase by a process that died mid-call."""
        phase = episode.generation_phase
        if not phase.is_pending or self.busy:
            return episode
        logger.warning(f"Episode {episode.episode_number} was left in {phase.value}; restoring it")
        return self._apply(episode, GenerationCancelled(phase, PENDING_TO_PREVIOUS[phase])).episode

    def cancel(self) -> None:
        """Forget any call in flight; its result will not be applied."""
        self.guard.cancel()
