"""
Section Composer - Lays out packed content under markdown headings.
"""

from typing import Optional, Sequence


class SectionComposer:
    """
    Wraps budget-approved content in ``Summary`` and ``Observations`` sections.

    The summary block ends with a blank line, which separates it from the
    observations block when both are present. ``compose`` leaves a block out
    when its input is ``None``; an empty observation list still produces the
    bare observations heading.
    """

    def __init__(
        self,
        summary_title: str = "Summary",
        observations_title: str = "Observations",
        level: int = 2
    ):
        if level < 1:
            raise ValueError("Heading level must be >= 1")
        self.summary_title = summary_title
        self.observations_title = observations_title
        self.level = level

    def heading(self, title: str) -> str:
        return f"{'#' * self.level} {title}\n"

    @property
    def summary_heading(self) -> str:
        return self.heading(self.summary_title)

    @property
    def observations_heading(self) -> str:
        return self.heading(self.observations_title)

    def summary_block(self, body: str) -> str:
        """Summary heading, body and the trailing blank line."""
        return f"{self.summary_heading}{body}\n\n"

    def observations_block(self, items: Sequence[str]) -> str:
        """Observations heading followed by items that carry their own line breaks."""
        return self.observations_heading + "".join(items)

    def compose(
        self,
        summary_body: Optional[str] = None,
        observation_items: Optional[Sequence[str]] = None
    ) -> str:
        """
        Join the sections into the final text.

        Args:
            summary_body: Rendered summary, or None if absent/excluded
            observation_items: Rendered observation texts, or None if there were none

        Returns:
            Assembled text ("" when both inputs are None)
        """
        blocks = []
        if summary_body is not None:
            blocks.append(self.summary_block(summary_body))
        if observation_items is not None:
            blocks.append(self.observations_block(observation_items))
        return "".join(blocks)
