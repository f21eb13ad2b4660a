"""Episode generation phases as a pure transition function.

``transition(episode, event)`` never performs I/O. It returns the next
episode value and the effects the caller must carry out (ask the model for
a response, persist the episode).
"""

from dataclasses import dataclass, field
from typing import List, Optional, Union

from ..generation.parsing import EpisodeResponseParser
from ..generation.prompts import build_initial_episode_prompt
from ..models import Episode, Phase, Turn

PENDING_TO_REVIEW = {
    Phase.ARC_PROPOSAL_PENDING: Phase.ARC_PROPOSAL_REVIEW,
    Phase.EPISODE_WRITING_PENDING: Phase.EPISODE_REVIEW,
    Phase.PANEL_BREAKDOWN_PENDING: Phase.PANEL_BREAKDOWN_REVIEW,
}

# The review (or start) phase each pending phase was entered from.
PENDING_TO_PREVIOUS = {
    Phase.ARC_PROPOSAL_PENDING: Phase.START,
    Phase.EPISODE_WRITING_PENDING: Phase.ARC_PROPOSAL_REVIEW,
    Phase.PANEL_BREAKDOWN_PENDING: Phase.EPISODE_REVIEW,
}

PANEL_TRIGGER = "generate panels"

# Where a failed call leaves the episode, whichever step failed. A failed
# panel breakdown therefore drops back to arc review, which is probably not
# what the user expects; EpisodeConfig.failure_phase="previous" changes it.
FIXED_FAILURE_PHASE = Phase.ARC_PROPOSAL_REVIEW


@dataclass(frozen=True)
class AutoStart:
    pass


@dataclass(frozen=True)
class UserInput:
    text: str


@dataclass(frozen=True)
class GenerationStarted:
    target: Phase


@dataclass(frozen=True)
class GenerationSucceeded:
    target: Phase
    prompt: str
    response: str


@dataclass(frozen=True)
class GenerationFailed:
    target: Phase
    message: str
    previous: Phase


@dataclass(frozen=True)
class GenerationCancelled:
    """The call was abandoned (interrupted, or its result went stale)."""

    target: Phase
    previous: Phase


@dataclass(frozen=True)
class MarkComplete:
    pass


Event = Union[
    AutoStart, UserInput, GenerationStarted, GenerationSucceeded, GenerationFailed,
    GenerationCancelled, MarkComplete,
]


@dataclass(frozen=True)
class RequestGeneration:
    target: Phase
    prompt: str


@dataclass(frozen=True)
class Persist:
    pass


Effect = Union[RequestGeneration, Persist]


@dataclass
class Transition:
    episode: Episode
    effects: List[Effect] = field(default_factory=list)

    @property
    def request(self) -> Optional[RequestGeneration]:
        return next((e for e in self.effects if isinstance(e, RequestGeneration)), None)


def needs_auto_start(episode: Episode) -> bool:
    return episode.generation_phase is Phase.START and not episode.history


def transition(
    episode: Episode,
    event: Event,
    parser: Optional[EpisodeResponseParser] = None,
    failure_phase: str = FIXED_FAILURE_PHASE.value,
) -> Transition:
    parser = parser or EpisodeResponseParser()
    phase = episode.generation_phase

    if isinstance(event, AutoStart):
        if not needs_auto_start(episode):
            return Transition(episode)
        prompt = build_initial_episode_prompt(episode)
        return Transition(episode, [RequestGeneration(Phase.ARC_PROPOSAL_PENDING, prompt)])

    if isinstance(event, UserInput):
        text = event.text
        if phase is Phase.ARC_PROPOSAL_REVIEW and text.strip():
            return Transition(episode, [RequestGeneration(Phase.EPISODE_WRITING_PENDING, text)])
        if phase is Phase.EPISODE_REVIEW and PANEL_TRIGGER in text.lower():
            return Transition(episode, [RequestGeneration(Phase.PANEL_BREAKDOWN_PENDING, text)])
        return Transition(episode)

    if isinstance(event, GenerationStarted):
        if event.target not in PENDING_TO_REVIEW:
            raise ValueError(f"{event.target.value} is not a pending phase")
        updated = episode.model_copy(update={"generation_phase": event.target})
        return Transition(updated, [Persist()])

    if isinstance(event, GenerationSucceeded):
        fields = parser.parse(event.target, event.response)
        history = [
            *episode.history,
            Turn(role="user", text=event.prompt),
            Turn(role="model", text=event.response),
        ]
        updated = episode.model_copy(update={
            **fields,
            "history": history,
            "generation_phase": PENDING_TO_REVIEW[event.target],
            "error": None,
        })
        return Transition(updated, [Persist()])

    if isinstance(event, GenerationFailed):
        if failure_phase == "previous":
            fallback = event.previous
        else:
            fallback = FIXED_FAILURE_PHASE
        updated = episode.model_copy(update={
            "generation_phase": fallback,
            "error": event.message,
        })
        return Transition(updated, [Persist()])

    if isinstance(event, GenerationCancelled):
        # Nothing was learned, so the episode goes back to where it was.
        if phase is not event.target:
            return Transition(episode)
        updated = episode.model_copy(update={"generation_phase": event.previous})
        return Transition(updated, [Persist()])

    if isinstance(event, MarkComplete):
        if phase is not Phase.PANEL_BREAKDOWN_REVIEW:
            return Transition(episode)
        updated = episode.model_copy(update={"generation_phase": Phase.COMPLETE})
        return Transition(updated, [Persist()])

    raise TypeError(f"Unknown event: {event!r}")
