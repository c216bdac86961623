"""
Budget Packer - Greedy, order-preserving selection of records under a token budget.

Packing order:
1. The session summary, if it fits the budget on its own
2. The observations heading, charged unconditionally
3. Observations in the order given, stopping at the first one that does not fit

The caller's ordering is the priority: a later, shorter observation never
displaces an earlier one that did not fit, even if that leaves budget unused.
"""

from typing import List, Optional, Sequence, Union
import logging

from moltbrain.context.composer import SectionComposer
from moltbrain.context.models import (
    AssemblyResult,
    ContextCandidates,
    Observation,
    RenderedItem,
    RenderMode,
    Summary,
)
from moltbrain.context.renderer import RecordRenderer
from moltbrain.context.token_manager import CharRatioEstimator, TokenEstimator
from moltbrain.context.utils import validate_budget
from moltbrain.core.observability import MetricsCollector

logger = logging.getLogger("moltbrain.context.packer")


# Flat charge for the observations heading. It is added whenever observations
# are offered and is not itself checked against the budget, so a result can
# exceed max_tokens by at most this much.
OBSERVATIONS_HEADING_TOKENS = 5

ITEM_SEPARATORS = {
    RenderMode.COMPACT: "\n",
    RenderMode.VERBOSE: "\n\n",
}


class BudgetPacker:
    """
    Assemble summary and observations into text that fits a token budget.

    Holds no per-call state; one instance can serve concurrent callers.

    Example:
        ```python
        packer = BudgetPacker()
        result = packer.pack(
            ContextCandidates(summary=summary, observations=recent),
            mode="compact",
            max_tokens=2000
        )
        print(result.text)
        print(f"{result.observations_included}/{result.observations_offered} observations, "
              f"{result.tokens_used} tokens")
        ```
    """

    def __init__(
        self,
        renderer: Optional[RecordRenderer] = None,
        estimator: Optional[TokenEstimator] = None,
        composer: Optional[SectionComposer] = None,
        metrics: Optional[MetricsCollector] = None,
        observations_heading_tokens: int = OBSERVATIONS_HEADING_TOKENS
    ):
        """
        Initialize packer.

        Args:
            renderer: Record renderer (default options if omitted)
            estimator: Token estimator (4 characters per token if omitted)
            composer: Section composer (``## Summary`` / ``## Observations`` if omitted)
            metrics: Optional metrics collector
            observations_heading_tokens: Flat charge for the observations heading
        """
        self.renderer = renderer or RecordRenderer()
        self.estimator = estimator or CharRatioEstimator()
        self.composer = composer or SectionComposer()
        self.metrics = metrics
        self.observations_heading_tokens = observations_heading_tokens

    def render_summary(self, summary: Summary, mode: RenderMode) -> RenderedItem:
        """Render the summary block and estimate its cost, heading included."""
        body = self.renderer.render_summary(summary, mode)
        block = self.composer.summary_block(body)
        return RenderedItem(
            kind="summary",
            record_id=summary.id,
            text=body,
            tokens=self.estimator.count_tokens(block)
        )

    def render_observation(self, obs: Observation, mode: RenderMode) -> RenderedItem:
        """Render one observation line/block and estimate its cost, line break included."""
        text = self.renderer.render_observation(obs, mode) + ITEM_SEPARATORS[mode]
        return RenderedItem(
            kind="observation",
            record_id=obs.id,
            text=text,
            tokens=self.estimator.count_tokens(text)
        )

    def pack(
        self,
        candidates: ContextCandidates,
        mode: Union[RenderMode, str] = RenderMode.COMPACT,
        max_tokens: int = 4000
    ) -> AssemblyResult:
        """
        Pack candidates into a budgeted context.

        Args:
            candidates: Summary and observations, already filtered and ordered
            mode: Rendering mode
            max_tokens: Token budget (0 yields no summary and no observations)

        Returns:
            AssemblyResult with text and token accounting

        Raises:
            InvalidBudgetError: If max_tokens is not a non-negative integer
            InvalidRenderModeError: If mode is unknown
        """
        max_tokens = validate_budget(max_tokens)
        mode = RenderMode.parse(mode)

        total = 0
        summary_body: Optional[str] = None

        if candidates.summary is not None:
            item = self.render_summary(candidates.summary, mode)
            if item.tokens < max_tokens:
                summary_body = item.text
                total += item.tokens
            else:
                logger.debug(
                    f"Summary {item.record_id} omitted: {item.tokens} tokens "
                    f"does not fit budget of {max_tokens}"
                )

        observations = candidates.observations
        included: List[RenderedItem] = []
        observation_items: Optional[List[str]] = None

        if observations:
            total += self.observations_heading_tokens

            for obs in observations:
                item = self.render_observation(obs, mode)
                if total + item.tokens > max_tokens:
                    logger.debug(
                        f"Budget reached at observation {item.record_id} "
                        f"({total} + {item.tokens} > {max_tokens}), "
                        f"stopping with {len(included)}/{len(observations)} included"
                    )
                    break
                included.append(item)
                total += item.tokens

            observation_items = [item.text for item in included]

        result = AssemblyResult(
            text=self.composer.compose(summary_body, observation_items),
            tokens_used=total,
            max_tokens=max_tokens,
            mode=mode,
            summary_included=summary_body is not None,
            observations_offered=len(observations),
            observations_included=len(included),
            included_ids=[item.record_id for item in included]
        )

        if self.metrics:
            self.metrics.record_assembly(
                mode=mode.value,
                tokens_used=result.tokens_used,
                observations_offered=result.observations_offered,
                observations_included=result.observations_included
            )

        return result

    def pack_records(
        self,
        observations: Sequence[Observation],
        summary: Optional[Summary] = None,
        mode: Union[RenderMode, str] = RenderMode.COMPACT,
        max_tokens: int = 4000
    ) -> AssemblyResult:
        """Convenience wrapper around ``pack`` taking records directly."""
        return self.pack(
            ContextCandidates(summary=summary, observations=list(observations)),
            mode=mode,
            max_tokens=max_tokens
        )


__all__ = [
    "BudgetPacker",
    "OBSERVATIONS_HEADING_TOKENS",
    "ITEM_SEPARATORS",
]
