"""Pydantic models for the generated content package.

Field names are snake_case in Python and camelCase on the wire, matching the
JSON the generation backend returns. Models accept either spelling.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from ..config import ContentGoal, Platform, ProjectStatus


class _WireModel(BaseModel):
    """Base for models that travel as camelCase JSON."""

    model_config = ConfigDict(populate_by_name=True)

    def to_wire(self) -> dict:
        """Dump with camelCase keys and JSON-safe values, skipping unset fields."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class ChatMessage(_WireModel):
    """One turn of the discovery chat."""

    id: str
    role: str = Field(pattern="^(user|assistant)$", description="user or assistant")
    content: str
    timestamp: int = Field(description="Milliseconds since the epoch")


class UserInputs(_WireModel):
    """Creator inputs used to build generation prompts."""

    topic: str | None = None
    goal: ContentGoal | None = None
    platforms: list[Platform] | None = None
    target_audience: str | None = Field(default=None, alias="targetAudience")
    tone: str | None = None
    duration: str | None = Field(default=None, description="e.g. 15s, 30s, 60s, 90s")
    uav_markers: str | None = Field(
        default=None,
        alias="uavMarkers",
        description="Comma-separated phrases that carry the creator's unique angle",
    )


class Hook(_WireModel):
    """An opening hook candidate."""

    id: str
    type: str
    text: str
    preview: str
    rank: int | None = Field(default=None, ge=1, le=6, description="1 is best")
    is_recommended: bool | None = Field(default=None, alias="isRecommended")


class ScriptLine(_WireModel):
    line_number: int = Field(alias="lineNumber")
    speaker: str | None = None
    text: str
    timing: str | None = None
    notes: str | None = None


class StoryboardFrame(_WireModel):
    frame_number: int = Field(alias="frameNumber")
    shot_type: str = Field(alias="shotType")
    description: str
    visual_notes: str | None = Field(default=None, alias="visualNotes")
    duration: str | None = Field(default=None, description="e.g. 3s")
    timestamp: str | None = Field(default=None, description="e.g. 0:00-0:03")


class TechSpecs(_WireModel):
    aspect_ratio: str = Field(alias="aspectRatio")
    resolution: str
    frame_rate: str = Field(alias="frameRate")
    duration: str
    audio_format: str | None = Field(default=None, alias="audioFormat")
    export_format: str | None = Field(default=None, alias="exportFormat")
    platforms: list[str] | None = None


class BRollItem(_WireModel):
    id: str
    description: str
    source: str
    timestamp: str | None = None
    keywords: list[str] | None = None


class Caption(_WireModel):
    id: str
    timestamp: str
    text: str
    style: str | None = None


class ContentOutput(_WireModel):
    """The full production package: script, storyboard, specs, B-roll, captions."""

    script: list[ScriptLine] = Field(default_factory=list)
    storyboard: list[StoryboardFrame] = Field(default_factory=list)
    tech_specs: TechSpecs = Field(alias="techSpecs")
    b_roll: list[BRollItem] = Field(default_factory=list, alias="bRoll")
    captions: list[Caption] = Field(default_factory=list)

    @property
    def script_text(self) -> str:
        """All script lines joined with spaces."""
        return " ".join(line.text for line in self.script)


class AlternativeCaption(_WireModel):
    """A platform-specific post caption offered alongside the video."""

    id: str
    platform: str
    caption: str
    hook: str | None = None
    body: str | None = None
    cta: str | None = None
    hashtags: list[str] = Field(default_factory=list)
    character_count: int = Field(alias="characterCount")
    estimated_engagement: str | None = Field(
        default=None, alias="estimatedEngagement", pattern="^(low|medium|high|viral)$"
    )
    research_source: str | None = Field(default=None, alias="researchSource")


class AgentStatus(_WireModel):
    name: str
    status: str = Field(pattern="^(idle|working|complete)$")
    task: str | None = None


class Project(_WireModel):
    """A content project from first message to finished package."""

    id: str
    status: ProjectStatus = ProjectStatus.INPUTTING
    inputs: UserInputs = Field(default_factory=UserInputs)
    messages: list[ChatMessage] = Field(default_factory=list)
    hooks: list[Hook] | None = None
    selected_hook: Hook | None = Field(default=None, alias="selectedHook")
    output: ContentOutput | None = None
    agents: list[AgentStatus] | None = None
    created_at: int = Field(alias="createdAt")
    updated_at: int = Field(alias="updatedAt")
