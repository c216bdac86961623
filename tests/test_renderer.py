"""Tests for compact and verbose record rendering."""

from datetime import datetime, timedelta, timezone

import pytest

from moltbrain.context import CompactOptions, ObservationType, VerboseOptions
from moltbrain.context.renderer import TYPE_EMOJIS, CompactRenderer, RecordRenderer, VerboseRenderer
from moltbrain.core.exceptions import InvalidRenderModeError

FIXED_TIME = datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


class TestCompactObservation:
    def test_full_line(self, make_observation):
        obs = make_observation(
            type="decision",
            title="Use SQLite",
            narrative="Zero-config storage",
            facts=["a", "b", "c", "d"],
            concepts=["storage", "db"],
        )
        line = CompactRenderer().format_observation(obs)
        assert line == "[DECISION] Use SQLite | Zero-config storage | Facts: a; b; c | [storage, db]"

    def test_title_only(self, make_observation):
        obs = make_observation(type="learning", title="Nothing else")
        assert CompactRenderer().format_observation(obs) == "[LEARNING] Nothing else"

    def test_long_narrative_truncated(self, make_observation):
        obs = make_observation(narrative="n" * 250)
        line = CompactRenderer().format_observation(obs)
        narrative = line.split(" | ")[1]
        assert narrative == "n" * 197 + "..."
        assert len(narrative) == 200

    def test_narrative_at_limit_unchanged(self, make_observation):
        obs = make_observation(narrative="n" * 200)
        line = CompactRenderer().format_observation(obs)
        assert line.split(" | ")[1] == "n" * 200

    def test_custom_narrative_length(self, make_observation):
        obs = make_observation(narrative="abcdefghij")
        renderer = CompactRenderer(CompactOptions(max_narrative_length=8))
        assert renderer.format_observation(obs).endswith("abcde...")

    def test_disabled_segments_omitted(self, make_observation):
        obs = make_observation(title="T", facts=["f"], concepts=["c"])
        renderer = CompactRenderer(CompactOptions(include_facts=False, include_concepts=False))
        assert renderer.format_observation(obs) == "[ISSUE] T"

    def test_empty_lists_omitted(self, make_observation):
        obs = make_observation(title="T", facts=[], concepts=[])
        assert "Facts" not in CompactRenderer().format_observation(obs)
        assert "[]" not in CompactRenderer().format_observation(obs)

    def test_files_off_by_default(self, make_observation):
        obs = make_observation(files_modified=["a.py"])
        assert "Files:" not in CompactRenderer().format_observation(obs)

    def test_files_first_three(self, make_observation):
        obs = make_observation(title="T", files_modified=["a.py", "b.py", "c.py", "d.py"])
        renderer = CompactRenderer(CompactOptions(include_files=True))
        assert renderer.format_observation(obs) == "[ISSUE] T | Files: a.py, b.py, c.py"

    def test_custom_separator(self, make_observation):
        obs = make_observation(title="T", narrative="n")
        renderer = CompactRenderer(CompactOptions(separator=" ~ "))
        assert renderer.format_observation(obs) == "[ISSUE] T ~ n"

    def test_json_encoded_arrays(self, make_observation):
        obs = make_observation(title="T", facts='["x", "y"]', concepts='["k"]')
        assert CompactRenderer().format_observation(obs) == "[ISSUE] T | Facts: x; y | [k]"

    def test_unparseable_array_is_empty(self, make_observation):
        obs = make_observation(title="T", facts="not json", concepts='{"a": 1}')
        assert CompactRenderer().format_observation(obs) == "[ISSUE] T"

    def test_rendering_is_repeatable(self, make_observation):
        obs = make_observation(narrative="x" * 300, facts=["a", "b", "c", "d"], concepts=["k"])
        renderer = CompactRenderer()
        assert renderer.format_observation(obs) == renderer.format_observation(obs)

    def test_format_observations_one_per_line(self, make_observation):
        observations = [make_observation(title="A"), make_observation(title="B")]
        assert CompactRenderer().format_observations(observations) == "[ISSUE] A\n[ISSUE] B"


class TestCompactSummary:
    def test_completed_truncated_to_150(self, make_summary):
        summary = make_summary(completed="c" * 160)
        assert CompactRenderer().format_summary(summary) == "Done: " + "c" * 147 + "..."

    def test_all_segments(self, make_summary):
        summary = make_summary(completed="built", learned="things", next_steps="ship", request="ignored")
        assert CompactRenderer().format_summary(summary) == "Done: built | Learned: things | Next: ship"

    def test_next_steps_truncated_to_100(self, make_summary):
        summary = make_summary(next_steps="n" * 120)
        assert CompactRenderer().format_summary(summary) == "Next: " + "n" * 97 + "..."

    def test_missing_slots_omitted(self, make_summary):
        summary = make_summary(learned="only this")
        assert CompactRenderer().format_summary(summary) == "Learned: only this"

    def test_empty_summary(self, make_summary):
        assert CompactRenderer().format_summary(make_summary()) == ""


class TestCompactContext:
    def test_unbudgeted_context(self, make_observation, make_summary):
        text = CompactRenderer().format_context(
            [make_observation(title="A")],
            make_summary(completed="done")
        )
        assert text == "## Session Summary\nDone: done\n\n## Recent Observations\n[ISSUE] A"

    def test_nothing(self):
        assert CompactRenderer().format_context([]) == ""


class TestVerboseObservation:
    def test_full_block(self, make_observation):
        obs = make_observation(
            type="implementation",
            title="Add cache",
            subtitle="LRU in front of the store",
            narrative="Long narrative " * 40,
            facts=["hit rate 90%", "ttl 5m"],
            concepts=["cache", "perf"],
            files_read=["store.py"],
            files_modified=["cache.py"],
            prompt_number=3,
        )
        text = VerboseRenderer().format_observation(obs)
        lines = text.split("\n")

        assert lines[0] == "## 🔧 Add cache"
        assert "*LRU in front of the store*" in lines
        assert ("Long narrative " * 40) in text
        assert "### Key Facts\n- hit rate 90%\n- ttl 5m" in text
        assert "**Concepts:** `cache` `perf`" in text
        assert "**Files Read:**\n- `store.py`" in text
        assert "**Files Modified:**\n- `cache.py`" in text
        assert lines[-1] == "*Project: demo | Type: implementation | Prompt #3 | 2026-01-02 03:04*"

    def test_reference_emoji(self, make_observation):
        obs = make_observation(type="reference", title="Docs")
        assert VerboseRenderer().format_observation(obs).startswith("## 🔗 Docs")

    @pytest.mark.parametrize("obs_type", list(ObservationType))
    def test_every_type_has_emoji(self, make_observation, obs_type):
        obs = make_observation(type=obs_type, title="T")
        header = VerboseRenderer().format_observation(obs).split("\n")[0]
        assert header == f"## {TYPE_EMOJIS[obs_type.value]} T"

    def test_absent_fields_skipped(self, make_observation):
        obs = make_observation(title="Bare")
        text = VerboseRenderer(VerboseOptions(include_metadata=False)).format_observation(obs)
        assert text == "## 🐛 Bare"

    def test_files_can_be_hidden(self, make_observation):
        obs = make_observation(files_read=["a.py"])
        text = VerboseRenderer(VerboseOptions(include_all_files=False)).format_observation(obs)
        assert "Files Read" not in text

    def test_timestamp_can_be_hidden(self, make_observation):
        obs = make_observation(type="issue")
        text = VerboseRenderer(VerboseOptions(include_timestamps=False)).format_observation(obs)
        assert text.endswith("*Project: demo | Type: issue*")


class TestVerboseDates:
    @pytest.mark.parametrize("delta,expected", [
        (timedelta(seconds=30), "just now"),
        (timedelta(minutes=5), "5m ago"),
        (timedelta(hours=3), "3h ago"),
        (timedelta(days=2), "2d ago"),
        (timedelta(days=10), "2026-01-02"),
    ])
    def test_relative(self, delta, expected):
        renderer = VerboseRenderer(
            VerboseOptions(date_format="relative"),
            clock=lambda: FIXED_TIME + delta
        )
        assert renderer.format_date(FIXED_TIME) == expected

    def test_both(self):
        renderer = VerboseRenderer(
            VerboseOptions(date_format="both"),
            clock=lambda: FIXED_TIME + timedelta(hours=1)
        )
        assert renderer.format_date(FIXED_TIME) == "1h ago (2026-01-02 03:04)"


class TestVerboseSummary:
    def test_slot_order_and_footer(self, make_summary):
        summary = make_summary(
            notes="n",
            next_steps="ns",
            completed="c",
            learned="l",
            investigated="i",
            request="r",
        )
        text = VerboseRenderer().format_summary(summary)
        headings = [
            "## What was requested",
            "## What was investigated",
            "## What was learned",
            "## What was completed",
            "## Next steps",
            "## Notes",
        ]
        positions = [text.index(h) for h in headings]
        assert positions == sorted(positions)
        assert text.endswith("---\n*Project: demo | Session: sess-123*")

    def test_missing_slots_have_no_heading(self, make_summary):
        text = VerboseRenderer(VerboseOptions(include_metadata=False)).format_summary(
            make_summary(learned="only")
        )
        assert text == "## What was learned\nonly"

    def test_session_view(self, make_summary, make_observation):
        text = VerboseRenderer().format_session(
            make_summary(request="r"),
            [make_observation(title="A"), make_observation(title="B")]
        )
        assert text.startswith("# Session Summary\n\n## What was requested\nr")
        assert "# Observations" in text
        assert "\n\n---\n\n## 🐛 B" in text


class TestRecordRenderer:
    def test_dispatch_by_mode(self, make_observation):
        obs = make_observation(title="T")
        renderer = RecordRenderer()
        assert renderer.render_observation(obs, "compact") == "[ISSUE] T"
        assert renderer.render_observation(obs, "verbose").startswith("## 🐛 T")

    def test_summary_dispatch(self, make_summary):
        summary = make_summary(completed="done")
        renderer = RecordRenderer()
        assert renderer.render_summary(summary, "compact") == "Done: done"
        assert renderer.render_summary(summary, "verbose").startswith("## What was completed")

    def test_unknown_mode(self, make_observation):
        with pytest.raises(InvalidRenderModeError):
            RecordRenderer().render_observation(make_observation(), "fancy")
