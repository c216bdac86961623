"""
Moltbrain - Session memory context for LLM prompts.

Moltbrain turns the observations and summaries captured during an agent's
work session into a single block of text that fits a token budget.

Example:
    ```python
    from moltbrain import ContextAssembler, Observation

    assembler = ContextAssembler()
    result = assembler.assemble(observations, summary=summary, max_tokens=2000)
    prompt = result.text + "\\n\\n" + user_prompt
    ```
"""

from moltbrain.__version__ import __version__
from moltbrain.context import (
    AssemblyResult,
    BudgetPacker,
    CharRatioEstimator,
    CompactOptions,
    ContextAssembler,
    ContextCandidates,
    ContextConfig,
    Observation,
    ObservationType,
    RecordRenderer,
    RenderMode,
    SectionComposer,
    Summary,
    TokenEstimator,
    VerboseOptions,
    estimate_tokens,
)
from moltbrain.core.exceptions import (
    MoltbrainError,
    ErrorCode,
    ConfigurationError,
    ContextError,
    InvalidBudgetError,
    InvalidRenderModeError,
)

__all__ = [
    "__version__",
    "AssemblyResult",
    "BudgetPacker",
    "CharRatioEstimator",
    "CompactOptions",
    "ContextAssembler",
    "ContextCandidates",
    "ContextConfig",
    "Observation",
    "ObservationType",
    "RecordRenderer",
    "RenderMode",
    "SectionComposer",
    "Summary",
    "TokenEstimator",
    "VerboseOptions",
    "estimate_tokens",
    "MoltbrainError",
    "ErrorCode",
    "ConfigurationError",
    "ContextError",
    "InvalidBudgetError",
    "InvalidRenderModeError",
]
