"""
Context Assembler - Configured entry point for budgeted context.

Wires renderer, composer and packer from a ``ContextConfig`` and applies
the configured budget and mode when a call does not override them.
"""

from datetime import datetime
from typing import TYPE_CHECKING, Callable, Optional, Sequence, Union
import logging
import time

from moltbrain.context.composer import SectionComposer
from moltbrain.context.config import ContextConfig
from moltbrain.context.models import AssemblyResult, Observation, RenderMode, Summary
from moltbrain.context.packer import BudgetPacker
from moltbrain.context.renderer import RecordRenderer
from moltbrain.context.token_manager import TokenEstimator
from moltbrain.core.observability import MetricsCollector
from moltbrain.logging.logger import StructuredLogger, get_logger

if TYPE_CHECKING:
    from moltbrain.core.config import MoltbrainConfig

logger = logging.getLogger("moltbrain.context.assembler")

STRUCTURED_LOGGER_NAME = "moltbrain.context"


class ContextAssembler:
    """
    Build prompt context from a session's records.

    Example:
        ```python
        assembler = ContextAssembler(ContextConfig(max_tokens=2000))

        result = assembler.assemble(recent_observations, summary=last_summary)
        prompt = f"{result.text}\\n\\n{user_message}"

        # Override per call
        verbose = assembler.assemble(recent_observations, mode="verbose", max_tokens=8000)

        # Or straight from settings
        assembler = ContextAssembler.from_config(get_config())
        ```
    """

    def __init__(
        self,
        config: Optional[ContextConfig] = None,
        estimator: Optional[TokenEstimator] = None,
        metrics: Optional[MetricsCollector] = None,
        structured_logger: Optional[StructuredLogger] = None,
        clock: Optional[Callable[[], datetime]] = None
    ):
        """
        Initialize assembler.

        Args:
            config: Context configuration (defaults if omitted)
            estimator: Token estimator passed to the packer
            metrics: Optional metrics collector
            structured_logger: Optional JSON logger for one entry per assembly
            clock: "Now" for relative timestamps in verbose mode
        """
        self.config = config or ContextConfig()
        self.metrics = metrics
        self.structured_logger = structured_logger

        renderer = RecordRenderer(
            compact=self.config.compact,
            verbose=self.config.verbose,
            clock=clock
        )
        self.packer = BudgetPacker(
            renderer=renderer,
            estimator=estimator,
            composer=SectionComposer(),
            metrics=metrics
        )

    @classmethod
    def from_config(
        cls,
        config: "MoltbrainConfig",
        estimator: Optional[TokenEstimator] = None,
        clock: Optional[Callable[[], datetime]] = None
    ) -> "ContextAssembler":
        """
        Build an assembler from process settings.

        Uses ``config.context`` for budget and rendering, creates a metrics
        collector honoring ``observability.metrics_enabled`` and a structured
        logger at ``observability.log_level``.

        Args:
            config: Loaded settings (see ``moltbrain.core.config.get_config``)
            estimator: Token estimator passed to the packer
            clock: "Now" for relative timestamps in verbose mode

        Returns:
            ContextAssembler
        """
        observability = config.observability
        return cls(
            config=config.context,
            estimator=estimator,
            metrics=MetricsCollector(enabled=observability.metrics_enabled),
            structured_logger=get_logger(
                STRUCTURED_LOGGER_NAME,
                level=observability.log_level.lower()
            ),
            clock=clock
        )

    def assemble(
        self,
        observations: Sequence[Observation],
        summary: Optional[Summary] = None,
        max_tokens: Optional[int] = None,
        mode: Optional[Union[RenderMode, str]] = None
    ) -> AssemblyResult:
        """
        Assemble context for one prompt.

        Args:
            observations: Candidate observations in priority order
            summary: Optional session summary
            max_tokens: Budget override (configured budget if None)
            mode: Mode override (configured mode if None)

        Returns:
            AssemblyResult
        """
        observations = list(observations)
        budget = self.config.max_tokens if max_tokens is None else max_tokens
        render_mode = self.config.mode if mode is None else mode

        started = time.perf_counter()
        result = self.packer.pack_records(
            observations,
            summary=summary,
            mode=render_mode,
            max_tokens=budget
        )
        duration_ms = (time.perf_counter() - started) * 1000

        logger.debug(
            f"Assembled {result.tokens_used}/{result.max_tokens} tokens "
            f"({result.mode.value}) in {duration_ms:.3f}ms"
        )

        if self.structured_logger:
            self.structured_logger.log_assembly(
                mode=result.mode.value,
                max_tokens=result.max_tokens,
                tokens_used=result.tokens_used,
                observations_offered=result.observations_offered,
                observations_included=result.observations_included,
                summary_included=result.summary_included,
                duration_ms=round(duration_ms, 3)
            )

            if result.observations_excluded:
                # Included observations are always a prefix of the input
                excluded = observations[result.observations_included:]
                self.structured_logger.log_truncation(
                    mode=result.mode.value,
                    max_tokens=result.max_tokens,
                    observations_offered=result.observations_offered,
                    observations_included=result.observations_included,
                    excluded_ids=[obs.id for obs in excluded]
                )

        return result
