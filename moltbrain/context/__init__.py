"""
Context - Token-budgeted assembly of session memory for LLM prompts.

Components:
- Token Estimator: approximate token counts (4 characters per token)
- Record Renderer: compact and verbose text forms of records
- Budget Packer: greedy, order-preserving selection under a budget
- Section Composer: headings and section layout

Example:
    ```python
    from moltbrain.context import BudgetPacker, ContextCandidates

    packer = BudgetPacker()
    result = packer.pack(
        ContextCandidates(summary=summary, observations=observations),
        mode="compact",
        max_tokens=1000
    )
    ```
"""

from moltbrain.context.assembler import ContextAssembler
from moltbrain.context.composer import SectionComposer
from moltbrain.context.config import CompactOptions, ContextConfig, VerboseOptions
from moltbrain.context.models import (
    AssemblyResult,
    ContextCandidates,
    Observation,
    ObservationType,
    RenderedItem,
    RenderMode,
    Summary,
)
from moltbrain.context.packer import BudgetPacker, OBSERVATIONS_HEADING_TOKENS
from moltbrain.context.renderer import CompactRenderer, RecordRenderer, VerboseRenderer
from moltbrain.context.token_manager import CharRatioEstimator, TokenEstimator, estimate_tokens

__all__ = [
    "ContextAssembler",
    "SectionComposer",
    "CompactOptions",
    "ContextConfig",
    "VerboseOptions",
    "AssemblyResult",
    "ContextCandidates",
    "Observation",
    "ObservationType",
    "RenderedItem",
    "RenderMode",
    "Summary",
    "BudgetPacker",
    "OBSERVATIONS_HEADING_TOKENS",
    "CompactRenderer",
    "RecordRenderer",
    "VerboseRenderer",
    "CharRatioEstimator",
    "TokenEstimator",
    "estimate_tokens",
]
