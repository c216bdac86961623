"""
Context assembly configuration.
"""

from typing import Literal
from pydantic import BaseModel, Field

from moltbrain.context.models import RenderMode


class CompactOptions(BaseModel):
    """Options for the single-line compact rendering."""

    max_narrative_length: int = Field(default=200, ge=4, description="Narrative is cut past this many characters")
    include_facts: bool = Field(default=True, description="Emit the Facts segment")
    include_concepts: bool = Field(default=True, description="Emit the concept tag segment")
    include_files: bool = Field(default=False, description="Emit the modified files segment")
    separator: str = Field(default=" | ", description="Joins the segments of one line")


class VerboseOptions(BaseModel):
    """Options for the multi-line verbose rendering."""

    include_metadata: bool = Field(default=True, description="Trailing project/type/prompt line")
    include_timestamps: bool = Field(default=True, description="Timestamp in the metadata line")
    include_all_files: bool = Field(default=True, description="Files read and modified lists")
    date_format: Literal["relative", "absolute", "both"] = Field(
        default="absolute",
        description="How timestamps are shown"
    )


class ContextConfig(BaseModel):
    """
    Context assembly configuration.

    Examples:
        # Defaults
        ContextConfig()

        # From a settings file section
        ContextConfig(**{
            "max_tokens": 8000,
            "mode": "verbose",
            "verbose": {"date_format": "both"}
        })
    """

    max_tokens: int = Field(default=4000, ge=1000, le=100000, description="Default token budget")
    mode: RenderMode = Field(default=RenderMode.COMPACT, description="Default rendering mode")
    compact: CompactOptions = Field(default_factory=CompactOptions, description="Compact mode options")
    verbose: VerboseOptions = Field(default_factory=VerboseOptions, description="Verbose mode options")
