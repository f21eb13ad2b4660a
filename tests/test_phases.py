"""Tests for the pure episode transition function."""

import pytest

from zenith_studio.episodes.phases import (
    PENDING_TO_PREVIOUS,
    AutoStart,
    GenerationCancelled,
    GenerationFailed,
    GenerationStarted,
    GenerationSucceeded,
    MarkComplete,
    Persist,
    RequestGeneration,
    UserInput,
    needs_auto_start,
    transition,
)
from zenith_studio.generation.parsing import CHARACTER_DB_SEPARATOR
from zenith_studio.models import Phase, Turn


def in_phase(episode, phase, **fields):
    return episode.model_copy(update={"generation_phase": phase, **fields})


class TestAutoStart:

    def test_fresh_episode_requests_arc_proposal(self, sample_episode):
        result = transition(sample_episode, AutoStart())
        request = result.request

        assert isinstance(request, RequestGeneration)
        assert request.target is Phase.ARC_PROPOSAL_PENDING
        assert "EPISODE NUMBER: 1" in request.prompt
        assert "Neonatal Jaundice" in request.prompt
        assert sample_episode.textbook_content in request.prompt
        assert result.episode is sample_episode

    def test_no_auto_start_with_history(self, sample_episode):
        episode = sample_episode.model_copy(update={"history": [Turn(role="user", text="hi")]})
        assert not needs_auto_start(episode)
        assert transition(episode, AutoStart()).effects == []

    def test_no_auto_start_outside_start(self, sample_episode):
        episode = in_phase(sample_episode, Phase.ARC_PROPOSAL_REVIEW)
        assert transition(episode, AutoStart()).effects == []


class TestUserInput:

    def test_any_text_in_arc_review_writes_episode(self, sample_episode):
        episode = in_phase(sample_episode, Phase.ARC_PROPOSAL_REVIEW)
        request = transition(episode, UserInput("Looks good, call the cardiologist Dr. Bello")).request
        assert request.target is Phase.EPISODE_WRITING_PENDING
        assert request.prompt == "Looks good, call the cardiologist Dr. Bello"

    def test_blank_text_in_arc_review_is_ignored(self, sample_episode):
        episode = in_phase(sample_episode, Phase.ARC_PROPOSAL_REVIEW)
        assert transition(episode, UserInput("   ")).effects == []

    def test_generate_panels_is_case_insensitive(self, sample_episode):
        episode = in_phase(sample_episode, Phase.EPISODE_REVIEW)
        request = transition(episode, UserInput("OK, Generate PANELS please")).request
        assert request.target is Phase.PANEL_BREAKDOWN_PENDING

    def test_other_text_in_episode_review_is_dropped(self, sample_episode):
        episode = in_phase(sample_episode, Phase.EPISODE_REVIEW, full_episode_script="SCRIPT")
        result = transition(episode, UserInput("make Dr. Ese funnier"))
        assert result.effects == []
        assert result.episode is episode
        assert result.episode.full_episode_script == "SCRIPT"

    @pytest.mark.parametrize("phase", [
        Phase.START,
        Phase.ARC_PROPOSAL_PENDING,
        Phase.PANEL_BREAKDOWN_REVIEW,
        Phase.COMPLETE,
    ])
    def test_input_elsewhere_is_ignored(self, sample_episode, phase):
        episode = in_phase(sample_episode, phase)
        assert transition(episode, UserInput("generate panels")).effects == []


class TestGenerationResults:

    def test_started_sets_pending_and_persists(self, sample_episode):
        result = transition(sample_episode, GenerationStarted(Phase.ARC_PROPOSAL_PENDING))
        assert result.episode.generation_phase is Phase.ARC_PROPOSAL_PENDING
        assert result.effects == [Persist()]
        assert sample_episode.generation_phase is Phase.START

    def test_started_rejects_review_phase(self, sample_episode):
        with pytest.raises(ValueError):
            transition(sample_episode, GenerationStarted(Phase.EPISODE_REVIEW))

    def test_arc_success(self, sample_episode):
        episode = in_phase(sample_episode, Phase.ARC_PROPOSAL_PENDING, error="old error")
        result = transition(episode, GenerationSucceeded(Phase.ARC_PROPOSAL_PENDING, "PROMPT", "ARC TEXT"))

        assert result.episode.generation_phase is Phase.ARC_PROPOSAL_REVIEW
        assert result.episode.story_arc_proposal == "ARC TEXT"
        assert result.episode.history == [
            Turn(role="user", text="PROMPT"),
            Turn(role="model", text="ARC TEXT"),
        ]
        assert result.episode.error is None
        assert result.effects == [Persist()]

    def test_episode_success_splits_character_update(self, sample_episode):
        response = f"COLD OPEN...\n{CHARACTER_DB_SEPARATOR}\nNEW INFORMATION"
        episode = in_phase(sample_episode, Phase.EPISODE_WRITING_PENDING)
        result = transition(episode, GenerationSucceeded(Phase.EPISODE_WRITING_PENDING, "Write it", response))

        assert result.episode.generation_phase is Phase.EPISODE_REVIEW
        assert result.episode.full_episode_script == "COLD OPEN...\n"
        assert result.episode.character_database_update == f"{CHARACTER_DB_SEPARATOR}\nNEW INFORMATION"

    def test_panel_success(self, sample_episode):
        episode = in_phase(sample_episode, Phase.PANEL_BREAKDOWN_PENDING)
        result = transition(episode, GenerationSucceeded(Phase.PANEL_BREAKDOWN_PENDING, "generate panels", "PANEL #1"))
        assert result.episode.generation_phase is Phase.PANEL_BREAKDOWN_REVIEW
        assert result.episode.panel_breakdown == "PANEL #1"

    @pytest.mark.parametrize("target,previous", [
        (Phase.ARC_PROPOSAL_PENDING, Phase.START),
        (Phase.EPISODE_WRITING_PENDING, Phase.ARC_PROPOSAL_REVIEW),
        (Phase.PANEL_BREAKDOWN_PENDING, Phase.EPISODE_REVIEW),
    ])
    def test_failure_always_lands_in_arc_review(self, sample_episode, target, previous):
        history = [Turn(role="user", text="p"), Turn(role="model", text="r")]
        episode = in_phase(sample_episode, target, history=history)
        result = transition(episode, GenerationFailed(target, "quota exceeded", previous))

        assert result.episode.generation_phase is Phase.ARC_PROPOSAL_REVIEW
        assert result.episode.history == history
        assert result.episode.error == "quota exceeded"
        assert result.effects == [Persist()]

    def test_failure_can_restore_previous_phase(self, sample_episode):
        episode = in_phase(sample_episode, Phase.PANEL_BREAKDOWN_PENDING)
        result = transition(
            episode,
            GenerationFailed(Phase.PANEL_BREAKDOWN_PENDING, "boom", Phase.EPISODE_REVIEW),
            failure_phase="previous",
        )
        assert result.episode.generation_phase is Phase.EPISODE_REVIEW


class TestMarkComplete:

    def test_from_panel_breakdown_review(self, sample_episode):
        episode = in_phase(sample_episode, Phase.PANEL_BREAKDOWN_REVIEW)
        result = transition(episode, MarkComplete())
        assert result.episode.generation_phase is Phase.COMPLETE
        assert result.effects == [Persist()]

    def test_ignored_elsewhere(self, sample_episode):
        episode = in_phase(sample_episode, Phase.EPISODE_REVIEW)
        result = transition(episode, MarkComplete())
        assert result.episode.generation_phase is Phase.EPISODE_REVIEW
        assert result.effects == []


class TestGenerationCancelled:

    def test_restores_phase_before_the_call(self, sample_episode):
        history = [Turn(role="user", text="p"), Turn(role="model", text="r")]
        episode = in_phase(sample_episode, Phase.EPISODE_WRITING_PENDING, history=history)
        result = transition(episode, GenerationCancelled(Phase.EPISODE_WRITING_PENDING, Phase.ARC_PROPOSAL_REVIEW))

        assert result.episode.generation_phase is Phase.ARC_PROPOSAL_REVIEW
        assert result.episode.history == history
        assert result.episode.error is None
        assert result.effects == [Persist()]

    def test_ignored_when_not_pending_that_target(self, sample_episode):
        episode = in_phase(sample_episode, Phase.EPISODE_REVIEW)
        result = transition(episode, GenerationCancelled(Phase.EPISODE_WRITING_PENDING, Phase.ARC_PROPOSAL_REVIEW))
        assert result.episode is episode
        assert result.effects == []

    @pytest.mark.parametrize("pending", list(PENDING_TO_PREVIOUS))
    def test_every_pending_phase_has_a_way_back(self, pending):
        assert not PENDING_TO_PREVIOUS[pending].is_pending
