"""Data models for Fountain normalization, scene headings and tags."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, Field

SceneHeadingField = Literal["type", "location", "time"]


class ElementKind(str, Enum):
    """Kind of a non-blank Fountain line."""

    SCENE_HEADING = "scene_heading"
    CHARACTER = "character"
    PARENTHETICAL = "parenthetical"
    DIALOGUE = "dialogue"
    ACTION = "action"
    TRANSITION = "transition"


@dataclass
class SceneHeadingParts:
    """Decomposition of one scene heading line."""

    type: str = ""
    location: str = ""
    time: str = ""
    full_text: str = ""


@dataclass
class SceneHeadingFieldInfo:
    """Which sub-field of a scene heading a cursor offset falls into."""

    field: SceneHeadingField
    cursor_in_field: int
    field_start: int
    field_end: int
    parts: SceneHeadingParts


@dataclass
class SceneTags:
    """Relationship directives found inside one scene.

    Line numbers are 1-based and inclusive; ``end_line`` of the last scene is
    the document's line count.
    """

    scene_heading: str
    start_line: int
    end_line: int = 0
    characters: list[str] = field(default_factory=list)
    location: str | None = None
    scene_id: str = ""


@dataclass
class SceneBlock:
    """A scene heading and the lines that belong to it (0-based, inclusive)."""

    heading: str
    start_index: int
    end_index: int
    lines: list[str] = field(default_factory=list)


@dataclass
class ImportedScene:
    """One scene discovered while scanning pasted Fountain text."""

    heading: str
    location: str
    characters: list[str]
    start_line: int
    end_line: int


@dataclass
class ImportSummary:
    """Locations, characters and scenes discovered in pasted Fountain text."""

    locations: list[str] = field(default_factory=list)
    characters: list[str] = field(default_factory=list)
    scenes: list[ImportedScene] = field(default_factory=list)


class SceneRef(BaseModel):
    """A stored scene record, reduced to what tag matching reads."""

    id: str
    heading: str


class CharacterRef(BaseModel):
    """A stored character record."""

    id: str
    name: str


class LocationRef(BaseModel):
    """A stored location record."""

    id: str
    name: str


class SceneRelations(BaseModel):
    """Character and location ids linked to one scene."""

    characters: list[str] = Field(default_factory=list)
    location: str | None = None


class Relationships(BaseModel):
    """Relationship graph keyed by scene id."""

    scenes: dict[str, SceneRelations] = Field(default_factory=dict)


class ScreenplayProject(BaseModel):
    """Everything ``update_script_tags`` needs, loadable from one JSON file."""

    scenes: list[SceneRef] = Field(default_factory=list)
    characters: list[CharacterRef] = Field(default_factory=list)
    locations: list[LocationRef] = Field(default_factory=list)
    relationships: Relationships = Field(default_factory=Relationships)


@dataclass
class SceneContext:
    """What the writer is working on at a cursor position."""

    scene_heading: str | None = None
    characters: list[str] = field(default_factory=list)
    story_beats: list[str] = field(default_factory=list)


IssueSeverity = Literal["error", "warning", "info"]
IssueType = Literal["character", "scene_heading", "dialogue", "spacing", "general"]

ISSUE_TYPES: tuple[IssueType, ...] = (
    "character",
    "scene_heading",
    "dialogue",
    "spacing",
    "general",
)


@dataclass
class FormatIssue:
    """One formatting problem found in a Fountain document.

    ``line_number`` is 1-based. A ``suggested_fix`` containing newlines
    replaces the line with several lines.
    """

    line_number: int
    severity: IssueSeverity
    type: IssueType
    description: str
    original_text: str
    suggested_fix: str | None = None


@dataclass
class FormatReport:
    """Every formatting issue found in a document."""

    issues: list[FormatIssue] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.issues

    @property
    def has_auto_fixable_issues(self) -> bool:
        return any(issue.suggested_fix is not None for issue in self.issues)

    def to_dict(self) -> dict[str, Any]:
        return {
            "is_valid": self.is_valid,
            "has_auto_fixable_issues": self.has_auto_fixable_issues,
            "issues": [asdict(issue) for issue in self.issues],
        }


@dataclass
class CorrectionResult:
    """A corrected document and the issues whose fixes were applied."""

    corrected_content: str
    applied_fixes: list[FormatIssue] = field(default_factory=list)

    @property
    def change_count(self) -> int:
        return len(self.applied_fixes)


@dataclass
class CharacterCount:
    """Document length with and without whitespace."""

    with_spaces: int
    without_spaces: int
