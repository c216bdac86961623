"""Tests for section layout."""

import pytest

from moltbrain.context import SectionComposer


class TestSectionComposer:
    def test_nothing(self):
        assert SectionComposer().compose() == ""

    def test_summary_only(self):
        assert SectionComposer().compose("body") == "## Summary\nbody\n\n"

    def test_both_sections_separated_by_blank_line(self):
        text = SectionComposer().compose("body", ["one\n", "two\n"])
        assert text == "## Summary\nbody\n\n## Observations\none\ntwo\n"

    def test_empty_observations_keep_heading(self):
        assert SectionComposer().compose(None, []) == "## Observations\n"

    def test_custom_titles_and_level(self):
        composer = SectionComposer(summary_title="Recap", observations_title="Notes", level=3)
        assert composer.compose("b", ["x\n"]) == "### Recap\nb\n\n### Notes\nx\n"

    def test_invalid_level(self):
        with pytest.raises(ValueError):
            SectionComposer(level=0)
