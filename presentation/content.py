"""
Portfolio Presenter - content document model

The whole presentation is one JSON document (`data/content.json`). Keys are kept
in the camelCase used on disk so a document round-trips without renaming.
Models are frozen: edits go through `presentation.editing` and return new values.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Iterator, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ==========================================
# Enums
# ==========================================

class CareerPhase(str, Enum):
    EDUCATION = "education"
    EARLY = "early"
    GROWTH = "growth"
    CURRENT = "current"


class PlaceLabel(str, Enum):
    SCHOOL = "School"
    UNIVERSITY = "University"
    COMPANY = "Company"


class NodeShape(str, Enum):
    CARD = "card"
    CIRCLE = "circle"


class SkillCategory(str, Enum):
    LANGUAGE = "language"
    FRAMEWORK = "framework"
    TOOL = "tool"
    OTHER = "other"


LESSON_ICONS = ("target", "lightbulb", "rocket", "star", "heart", "fire")


class _Document(BaseModel):
    # Unknown keys survive a load/save cycle.
    model_config = ConfigDict(frozen=True, extra="allow")


def _known_or_none(enum_cls: type[Enum], value: Any) -> Any:
    """Enum member for a recognized value, None for anything else."""
    if value is None or isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        return None


# ==========================================
# Node Types
# ==========================================

class Position(_Document):
    x: float
    y: float


class TimelineMilestone(_Document):
    id: str
    role: str
    company: str
    dateRange: str
    description: str = ""
    # Unknown phases stay plain strings and render gray.
    phase: Union[CareerPhase, str] = Field(default=CareerPhase.EARLY, union_mode="left_to_right")
    project: Optional[str] = None
    course: Optional[str] = None
    logoUrl: Optional[str] = None
    expandedDetails: Optional[str] = None
    placeLabel: Optional[PlaceLabel] = None
    children: Optional[List["TimelineMilestone"]] = None
    position: Optional[Position] = None
    shape: Optional[NodeShape] = None
    color: Optional[str] = None

    @field_validator("children")
    @classmethod
    def _single_nesting_level(cls, children: Optional[List["TimelineMilestone"]]):
        for child in children or []:
            if child.children:
                raise ValueError(f"child node {child.id} cannot hold children of its own")
        return children

    @field_validator("phase", mode="before")
    @classmethod
    def _lenient_phase(cls, value: Any):
        if value is None:
            return CareerPhase.EARLY
        return value if isinstance(value, str) else str(value)

    @field_validator("shape", mode="before")
    @classmethod
    def _lenient_shape(cls, value: Any):
        return _known_or_none(NodeShape, value)

    @field_validator("placeLabel", mode="before")
    @classmethod
    def _lenient_place_label(cls, value: Any):
        return _known_or_none(PlaceLabel, value)

    @property
    def resolved_shape(self) -> NodeShape:
        return self.shape or NodeShape.CARD

    @property
    def has_children(self) -> bool:
        return bool(self.children)


def place_display(milestone: TimelineMilestone) -> str:
    """Company name, prefixed with the place label for schools and universities."""
    label = milestone.placeLabel or PlaceLabel.COMPANY
    if label == PlaceLabel.COMPANY:
        return milestone.company
    return f"{label.value}: {milestone.company}"


def iter_milestones(milestones: List[TimelineMilestone]) -> Iterator[TimelineMilestone]:
    """Yield every milestone, each parent followed by its children."""
    for m in milestones:
        yield m
        for child in m.children or []:
            yield child


# ==========================================
# Sections
# ==========================================

class HeroContent(_Document):
    name: str
    title: str
    tagline: str
    ctaText: str
    linkedInUrl: Optional[str] = None
    linkedInCtaText: Optional[str] = None


class StrategyContent(_Document):
    headline: str
    description: str
    points: List[str] = Field(default_factory=list)
    pointPositions: Optional[List[Position]] = None


class SkillBadge(_Document):
    id: str
    name: str
    category: SkillCategory = SkillCategory.OTHER

    @field_validator("category", mode="before")
    @classmethod
    def _lenient_category(cls, value: Any):
        return _known_or_none(SkillCategory, value) or SkillCategory.OTHER


class ProjectCard(_Document):
    id: str
    title: str
    description: str = ""
    outcomes: List[str] = Field(default_factory=list)
    techStack: Optional[List[str]] = None


class CareerPathStep(_Document):
    id: str
    number: int = 1
    title: str
    description: str = ""


class CareerPathStepsContent(_Document):
    headline: str
    description: str
    steps: List[CareerPathStep] = Field(default_factory=list)


class LessonLearned(_Document):
    id: str
    number: int = 1
    headline: str
    paragraph: str = ""
    icon: str = "target"


class FutureGoal(_Document):
    id: str
    title: str
    description: str = ""


class FutureGoalsContent(_Document):
    headline: str
    vision: str
    goals: List[FutureGoal] = Field(default_factory=list)
    ctaText: str
    linkedInUrl: Optional[str] = None


class PresentationContent(_Document):
    hero: HeroContent
    strategy: StrategyContent
    timeline: List[TimelineMilestone] = Field(default_factory=list)
    careerPathSteps: Optional[CareerPathStepsContent] = None
    skills: List[SkillBadge] = Field(default_factory=list)
    projects: List[ProjectCard] = Field(default_factory=list)
    lessons: List[LessonLearned] = Field(default_factory=list)
    futureGoals: FutureGoalsContent

    @classmethod
    def from_json_data(cls, data: Any) -> "PresentationContent":
        return cls.model_validate(data)

    def to_json_data(self) -> dict[str, Any]:
        """Plain JSON-ready dict with unset optionals omitted."""
        return self.model_dump(mode="json", exclude_none=True)
