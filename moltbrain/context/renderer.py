"""
Record Renderer - Text forms of observations and summaries.

Two styles:
- compact: one line per record, truncated, built for token economy
- verbose: markdown blocks with every field, built for reading

Rendering has no budget awareness and never fails on absent optional
fields; missing segments are simply left out.
"""

from datetime import datetime, timezone
from typing import Callable, List, Optional, Sequence, Union

from moltbrain.context.config import CompactOptions, VerboseOptions
from moltbrain.context.models import Observation, RenderMode, Summary
from moltbrain.context.utils import parse_array, truncate


# Per-slot ceilings for the compact summary line
SUMMARY_COMPLETED_LENGTH = 150
SUMMARY_LEARNED_LENGTH = 150
SUMMARY_NEXT_STEPS_LENGTH = 100

COMPACT_MAX_FACTS = 3
COMPACT_MAX_FILES = 3

TYPE_EMOJIS = {
    "discovery": "🔍",
    "decision": "⚖️",
    "implementation": "🔧",
    "issue": "🐛",
    "learning": "📚",
    "reference": "🔗",
}

SUMMARY_HEADINGS = (
    ("request", "What was requested"),
    ("investigated", "What was investigated"),
    ("learned", "What was learned"),
    ("completed", "What was completed"),
    ("next_steps", "Next steps"),
    ("notes", "Notes"),
)


def _type_name(obs: Observation) -> str:
    return obs.type.value


class CompactRenderer:
    """
    Token-efficient single-line rendering.

    Example:
        ```python
        renderer = CompactRenderer(CompactOptions(max_narrative_length=120))
        line = renderer.format_observation(obs)
        # [DECISION] Use SQLite | Chosen for zero-config... | Facts: a; b | [storage]
        ```
    """

    def __init__(self, options: Optional[CompactOptions] = None):
        """
        Initialize renderer.

        Args:
            options: Compact rendering options (defaults if omitted)
        """
        self.options = options or CompactOptions()

    def format_observation(self, obs: Observation) -> str:
        """Format a single observation as one line."""
        parts: List[str] = [f"[{_type_name(obs).upper()}] {obs.title}"]

        if obs.narrative:
            parts.append(truncate(obs.narrative, self.options.max_narrative_length))

        if self.options.include_facts:
            facts = parse_array(obs.facts)
            if facts:
                parts.append(f"Facts: {'; '.join(facts[:COMPACT_MAX_FACTS])}")

        if self.options.include_concepts:
            concepts = parse_array(obs.concepts)
            if concepts:
                parts.append(f"[{', '.join(concepts)}]")

        if self.options.include_files:
            files = parse_array(obs.files_modified)
            if files:
                parts.append(f"Files: {', '.join(files[:COMPACT_MAX_FILES])}")

        return self.options.separator.join(parts)

    def format_observations(self, observations: Sequence[Observation]) -> str:
        """Format observations one per line."""
        return "\n".join(self.format_observation(obs) for obs in observations)

    def format_summary(self, summary: Summary) -> str:
        """Format the completed/learned/next-steps slots as one line."""
        parts: List[str] = []

        if summary.completed:
            parts.append(f"Done: {truncate(summary.completed, SUMMARY_COMPLETED_LENGTH)}")

        if summary.learned:
            parts.append(f"Learned: {truncate(summary.learned, SUMMARY_LEARNED_LENGTH)}")

        if summary.next_steps:
            parts.append(f"Next: {truncate(summary.next_steps, SUMMARY_NEXT_STEPS_LENGTH)}")

        return self.options.separator.join(parts)

    def format_context(
        self,
        observations: Sequence[Observation],
        summary: Optional[Summary] = None
    ) -> str:
        """
        Format summary and observations without any budget.

        Args:
            observations: Observations to include, in order
            summary: Optional session summary

        Returns:
            Context text with ``## Session Summary`` and
            ``## Recent Observations`` sections
        """
        lines: List[str] = []

        if summary:
            lines.append("## Session Summary")
            lines.append(self.format_summary(summary))
            lines.append("")

        if observations:
            lines.append("## Recent Observations")
            lines.append(self.format_observations(observations))

        return "\n".join(lines)


class VerboseRenderer:
    """
    Full-detail markdown rendering.

    Timestamps are rendered against ``clock`` so output for a fixed clock is
    deterministic.
    """

    def __init__(
        self,
        options: Optional[VerboseOptions] = None,
        clock: Optional[Callable[[], datetime]] = None
    ):
        """
        Initialize renderer.

        Args:
            options: Verbose rendering options (defaults if omitted)
            clock: Returns "now" for relative timestamps (UTC wall clock by default)
        """
        self.options = options or VerboseOptions()
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def format_observation(self, obs: Observation) -> str:
        """Format a single observation as a markdown block."""
        type_name = _type_name(obs)
        lines: List[str] = [f"## {TYPE_EMOJIS[type_name]} {obs.title}", ""]

        if obs.subtitle:
            lines.extend([f"*{obs.subtitle}*", ""])

        if obs.narrative:
            lines.extend([obs.narrative, ""])

        facts = parse_array(obs.facts)
        if facts:
            lines.append("### Key Facts")
            lines.extend(f"- {fact}" for fact in facts)
            lines.append("")

        concepts = parse_array(obs.concepts)
        if concepts:
            lines.append(f"**Concepts:** {' '.join(f'`{c}`' for c in concepts)}")
            lines.append("")

        if self.options.include_all_files:
            for label, files in (
                ("Files Read", parse_array(obs.files_read)),
                ("Files Modified", parse_array(obs.files_modified)),
            ):
                if files:
                    lines.append(f"**{label}:**")
                    lines.extend(f"- `{path}`" for path in files)
                    lines.append("")

        if self.options.include_metadata:
            meta = [f"Project: {obs.project}", f"Type: {type_name}"]
            if obs.prompt_number is not None:
                meta.append(f"Prompt #{obs.prompt_number}")
            if self.options.include_timestamps and obs.created_at:
                meta.append(self.format_date(obs.created_at))
            lines.append(f"*{' | '.join(meta)}*")

        return "\n".join(lines).rstrip("\n")

    def format_observations(self, observations: Sequence[Observation]) -> str:
        """Format observations separated by horizontal rules."""
        return "\n\n---\n\n".join(self.format_observation(obs) for obs in observations)

    def format_summary(self, summary: Summary) -> str:
        """Format each non-empty slot as its own section."""
        lines: List[str] = []

        for slot, heading in SUMMARY_HEADINGS:
            value = getattr(summary, slot)
            if value:
                lines.extend([f"## {heading}", value, ""])

        if self.options.include_metadata:
            lines.append("---")
            lines.append(f"*Project: {summary.project} | Session: {summary.session_id[:8]}*")

        return "\n".join(lines).rstrip("\n")

    def format_session(self, summary: Summary, observations: Sequence[Observation]) -> str:
        """Format a whole session, summary first, without any budget."""
        return "\n".join([
            "# Session Summary",
            "",
            self.format_summary(summary),
            "",
            "---",
            "",
            "# Observations",
            "",
            self.format_observations(observations),
        ])

    def format_date(self, value: datetime) -> str:
        """Render a timestamp per ``date_format``."""
        if self.options.date_format == "relative":
            return self._relative_time(value)
        if self.options.date_format == "absolute":
            return value.strftime("%Y-%m-%d %H:%M")
        return f"{self._relative_time(value)} ({value.strftime('%Y-%m-%d %H:%M')})"

    def _relative_time(self, value: datetime) -> str:
        now = self._clock()
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)

        seconds = (now - value).total_seconds()
        minutes = int(seconds // 60)
        hours = int(seconds // 3600)
        days = int(seconds // 86400)

        if minutes < 1:
            return "just now"
        if minutes < 60:
            return f"{minutes}m ago"
        if hours < 24:
            return f"{hours}h ago"
        if days < 7:
            return f"{days}d ago"
        return value.strftime("%Y-%m-%d")


class RecordRenderer:
    """
    Dispatches rendering to the compact or verbose renderer by mode.

    Example:
        ```python
        renderer = RecordRenderer(compact=CompactOptions(include_files=True))
        renderer.render_observation(obs, "compact")
        renderer.render_summary(summary, RenderMode.VERBOSE)
        ```
    """

    def __init__(
        self,
        compact: Optional[CompactOptions] = None,
        verbose: Optional[VerboseOptions] = None,
        clock: Optional[Callable[[], datetime]] = None
    ):
        self.compact = CompactRenderer(compact)
        self.verbose = VerboseRenderer(verbose, clock=clock)

    def _for_mode(self, mode: Union[RenderMode, str]):
        if RenderMode.parse(mode) is RenderMode.VERBOSE:
            return self.verbose
        return self.compact

    def render_observation(self, obs: Observation, mode: Union[RenderMode, str]) -> str:
        """Render one observation in the given mode."""
        return self._for_mode(mode).format_observation(obs)

    def render_summary(self, summary: Summary, mode: Union[RenderMode, str]) -> str:
        """Render one summary in the given mode."""
        return self._for_mode(mode).format_summary(summary)

__all__ = [
    "CompactRenderer",
    "VerboseRenderer",
    "RecordRenderer",
    "SUMMARY_COMPLETED_LENGTH",
    "SUMMARY_LEARNED_LENGTH",
    "SUMMARY_NEXT_STEPS_LENGTH",
]
