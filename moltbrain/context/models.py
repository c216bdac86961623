"""
Records consumed by the context assembler and the result it returns.

Observations and summaries are produced by the capture pipeline and stored
elsewhere; the assembler only reads them.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from moltbrain.context.utils import parse_array
from moltbrain.core.exceptions import InvalidRenderModeError


class ObservationType(str, Enum):
    """Kinds of captured work."""
    DISCOVERY = "discovery"
    DECISION = "decision"
    IMPLEMENTATION = "implementation"
    ISSUE = "issue"
    LEARNING = "learning"
    REFERENCE = "reference"


class RenderMode(str, Enum):
    """Rendering styles for records."""
    COMPACT = "compact"
    VERBOSE = "verbose"

    @classmethod
    def parse(cls, value: Union["RenderMode", str]) -> "RenderMode":
        """
        Resolve a mode from an enum member or its string value.

        Raises:
            InvalidRenderModeError: If the value names no mode
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.lower())
            except ValueError:
                pass
        raise InvalidRenderModeError(value, [m.value for m in cls])


class Observation(BaseModel):
    """
    One captured unit of work from a session.

    List fields accept a native list or a JSON-encoded string.
    """

    id: Union[str, int] = Field(..., description="Opaque unique identifier")
    session_id: str = Field(..., description="Session this observation belongs to")
    type: ObservationType = Field(..., description="Kind of work captured")
    title: str = Field(..., description="Short title")
    subtitle: Optional[str] = Field(None, description="Optional subtitle")
    narrative: Optional[str] = Field(None, description="Free-text narrative")

    facts: List[str] = Field(default_factory=list, description="Short fact strings")
    concepts: List[str] = Field(default_factory=list, description="Concept tags")
    files_read: List[str] = Field(default_factory=list, description="Paths read")
    files_modified: List[str] = Field(default_factory=list, description="Paths modified")

    project: str = Field(..., description="Project name")
    prompt_number: Optional[int] = Field(None, description="Sequence number within the session")
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    discovery_tokens: Optional[int] = Field(None, description="Tokens spent producing this observation")

    model_config = ConfigDict(frozen=True)

    @field_validator("facts", "concepts", "files_read", "files_modified", mode="before")
    @classmethod
    def _parse_list_field(cls, value: Any) -> List[str]:
        return parse_array(value)

    @field_validator("type", mode="before")
    @classmethod
    def _normalize_type(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_serializer("created_at")
    def serialize_datetime(self, value: datetime) -> str:
        return value.isoformat()


SUMMARY_SLOTS = ("request", "investigated", "learned", "completed", "next_steps", "notes")


class Summary(BaseModel):
    """Session-level synthesis. Empty slots are stored as None."""

    id: Union[str, int] = Field(..., description="Opaque unique identifier")
    session_id: str = Field(..., description="Session summarized")
    project: str = Field(..., description="Project name")

    request: Optional[str] = Field(None, description="What was requested")
    investigated: Optional[str] = Field(None, description="What was investigated")
    learned: Optional[str] = Field(None, description="What was learned")
    completed: Optional[str] = Field(None, description="What was completed")
    next_steps: Optional[str] = Field(None, description="Suggested next steps")
    notes: Optional[str] = Field(None, description="Anything else")

    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    model_config = ConfigDict(frozen=True)

    @field_validator(*SUMMARY_SLOTS, mode="before")
    @classmethod
    def _empty_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value:
            return None
        return value

    @field_serializer("created_at")
    def serialize_datetime(self, value: datetime) -> str:
        return value.isoformat()

    def slots(self) -> Dict[str, str]:
        """Non-empty slots in display order."""
        return {
            name: getattr(self, name)
            for name in SUMMARY_SLOTS
            if getattr(self, name)
        }


class ContextCandidates(BaseModel):
    """Records offered to the packer, already filtered and ordered by the caller."""

    summary: Optional[Summary] = None
    observations: List[Observation] = Field(default_factory=list)


@dataclass(frozen=True)
class RenderedItem:
    """Text for one record, paired with its estimated token cost."""

    kind: str
    record_id: Union[str, int]
    text: str
    tokens: int


class AssemblyResult(BaseModel):
    """Output of one packing call."""

    text: str = Field(..., description="Assembled context text")
    tokens_used: int = Field(..., description="Estimated tokens, including heading overhead")
    max_tokens: int = Field(..., description="Budget that was requested")
    mode: RenderMode = Field(..., description="Rendering mode used")
    summary_included: bool = Field(False, description="Whether the summary fit")
    observations_offered: int = Field(0, description="Observations passed in")
    observations_included: int = Field(0, description="Observations in the text")
    included_ids: List[Union[str, int]] = Field(default_factory=list, description="IDs of included observations, in order")

    @property
    def observations_excluded(self) -> int:
        return self.observations_offered - self.observations_included

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging or API responses."""
        data = self.model_dump(mode="json")
        data["observations_excluded"] = self.observations_excluded
        return data
