import pytest

from zenith_studio.errors import InvalidOutputError
from zenith_studio.generation.parsing import (
    CHARACTER_DB_SEPARATOR,
    EpisodeResponseParser,
    parse_panel_batch,
    split_episode_script,
    strip_code_fence,
)
from zenith_studio.models import Phase


class TestStripCodeFence:

    def test_json_fence(self):
        assert strip_code_fence('```json\n[1, 2]\n```') == "[1, 2]"

    def test_bare_fence(self):
        assert strip_code_fence('  ```\n{"a": 1}\n```  ') == '{"a": 1}'

    def test_no_fence(self):
        assert strip_code_fence('  [1]\n') == "[1]"


class TestParsePanelBatch:

    def test_fenced_batch(self, panel_batch_json):
        drafts = parse_panel_batch(panel_batch_json)
        assert len(drafts) == 2
        assert drafts[0].visual_description.startswith("A newborn")
        assert drafts[0].dialogue[0].character == "Dr. Precious"
        assert drafts[1].caption == ""

    def test_missing_fields_default_to_empty(self):
        drafts = parse_panel_batch('[{"caption": "Only a caption"}]')
        assert drafts[0].caption == "Only a caption"
        assert drafts[0].visual_description == ""
        assert drafts[0].dialogue == []

    def test_object_is_rejected(self):
        with pytest.raises(InvalidOutputError, match="not an array"):
            parse_panel_batch('{"panels": []}')

    def test_invalid_json_is_rejected(self):
        with pytest.raises(InvalidOutputError):
            parse_panel_batch("[{\"caption\": ")

    def test_empty_array_is_rejected(self):
        with pytest.raises(InvalidOutputError):
            parse_panel_batch("[]")

    def test_malformed_item_rejects_whole_batch(self):
        with pytest.raises(InvalidOutputError):
            parse_panel_batch('[{"caption": "ok"}, "not a panel"]')


class TestSplitEpisodeScript:

    def test_split_at_separator(self):
        text = f"INT. WARD - NIGHT\nScene...\n{CHARACTER_DB_SEPARATOR}\nDr. Ese: braver"
        script, update = split_episode_script(text)
        assert script == "INT. WARD - NIGHT\nScene...\n"
        assert update == f"{CHARACTER_DB_SEPARATOR}\nDr. Ese: braver"
        assert script + update == text

    def test_split_uses_last_occurrence(self):
        text = f"Act 1 mentions {CHARACTER_DB_SEPARATOR} in passing\nAct 2\n{CHARACTER_DB_SEPARATOR}\nnotes"
        script, update = split_episode_script(text)
        assert script == text[:text.rfind(CHARACTER_DB_SEPARATOR)]
        assert update == f"{CHARACTER_DB_SEPARATOR}\nnotes"

    def test_no_separator(self):
        script, update = split_episode_script("Just the episode.")
        assert script == "Just the episode."
        assert update is None


class TestEpisodeResponseParser:

    def test_arc_proposal(self):
        fields = EpisodeResponseParser().parse(Phase.ARC_PROPOSAL_PENDING, "ARC")
        assert fields == {"story_arc_proposal": "ARC"}

    def test_episode_without_separator_leaves_update_unset(self):
        fields = EpisodeResponseParser().parse(Phase.EPISODE_WRITING_PENDING, "SCRIPT")
        assert fields == {"full_episode_script": "SCRIPT"}

    def test_panel_breakdown(self):
        fields = EpisodeResponseParser().parse(Phase.PANEL_BREAKDOWN_PENDING, "PANELS")
        assert fields == {"panel_breakdown": "PANELS"}

    def test_review_phase_has_no_fields(self):
        with pytest.raises(ValueError):
            EpisodeResponseParser().parse(Phase.EPISODE_REVIEW, "x")
