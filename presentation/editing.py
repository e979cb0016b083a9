"""
Portfolio Presenter - document edits

Every function takes a `PresentationContent` and returns a new one; nothing is
changed in place. Items are addressed by id, strategy points and outcomes by
index.
"""

from __future__ import annotations

import uuid
from typing import Any, Dict, List, Optional, Sequence

from .content import (
    LESSON_ICONS,
    CareerPathStep,
    CareerPathStepsContent,
    CareerPhase,
    FutureGoal,
    LessonLearned,
    NodeShape,
    Position,
    PresentationContent,
    ProjectCard,
    SkillBadge,
    SkillCategory,
    TimelineMilestone,
)
from .errors import ItemIndexError, UnknownNodeError


def new_id() -> str:
    return uuid.uuid4().hex[:8]


def coerce_number(raw: Any, default: int = 1) -> int:
    """Lenient integer parse: leading digits win, anything unusable (or zero) is `default`."""
    if isinstance(raw, bool):
        return default
    if isinstance(raw, (int, float)):
        value = int(raw)
        return value or default
    text = str(raw or "").strip()
    sign = ""
    if text and text[0] in "+-":
        sign, text = text[0], text[1:]
    digits = ""
    for ch in text:
        if not ch.isdigit():
            break
        digits += ch
    if not digits:
        return default
    return int(sign + digits) or default


def _replace_by_id(items: Sequence[Any], item_id: str, patch: Dict[str, Any]) -> List[Any]:
    found = False
    out = []
    for item in items:
        if item.id == item_id:
            found = True
            item = item.model_copy(update=patch)
        out.append(item)
    if not found:
        raise UnknownNodeError(item_id)
    return out


def _without_id(items: Sequence[Any], item_id: str) -> List[Any]:
    return [item for item in items if item.id != item_id]


def _section(content: PresentationContent, name: str, patch: Dict[str, Any]) -> PresentationContent:
    section = getattr(content, name)
    return content.model_copy(update={name: section.model_copy(update=patch)})


# ==========================================
# Hero / strategy / goals headers
# ==========================================

def update_hero(content: PresentationContent, **patch: Any) -> PresentationContent:
    return _section(content, "hero", patch)


def update_strategy(content: PresentationContent, **patch: Any) -> PresentationContent:
    return _section(content, "strategy", patch)


def update_future_goals(content: PresentationContent, **patch: Any) -> PresentationContent:
    return _section(content, "futureGoals", patch)


def update_career_path_steps(content: PresentationContent, **patch: Any) -> PresentationContent:
    if content.careerPathSteps is None:
        return content
    return _section(content, "careerPathSteps", patch)


# ==========================================
# Strategy points
# ==========================================

def _check_index(items: Sequence[Any], index: int) -> None:
    # Negative indexes are rejected rather than counted from the end.
    if not 0 <= index < len(items):
        raise ItemIndexError(index, len(items))


def _trim_positions(positions: Optional[List[Position]], index: int) -> Optional[List[Position]]:
    if positions is None:
        return None
    return [p for i, p in enumerate(positions) if i != index]


def update_strategy_point(content: PresentationContent, index: int, text: str) -> PresentationContent:
    points = list(content.strategy.points)
    _check_index(points, index)
    points[index] = text
    return update_strategy(content, points=points)


def add_strategy_point(content: PresentationContent, text: str = "New point") -> PresentationContent:
    # Stored positions stop matching the point count, so the V layout takes over.
    return update_strategy(content, points=[*content.strategy.points, text])


def remove_strategy_point(content: PresentationContent, index: int) -> PresentationContent:
    _check_index(content.strategy.points, index)
    points = [p for i, p in enumerate(content.strategy.points) if i != index]
    return update_strategy(
        content,
        points=points,
        pointPositions=_trim_positions(content.strategy.pointPositions, index),
    )


def set_point_positions(content: PresentationContent, positions: Sequence[Position]) -> PresentationContent:
    return update_strategy(content, pointPositions=list(positions))


# ==========================================
# Timeline
# ==========================================

def replace_timeline(content: PresentationContent, milestones: Sequence[TimelineMilestone]) -> PresentationContent:
    """Write back a whole node collection, e.g. the one a canvas reported after a drag."""
    return content.model_copy(update={"timeline": list(milestones)})


def add_milestone(
    content: PresentationContent,
    shape: NodeShape = NodeShape.CARD,
    color: Optional[str] = None,
) -> PresentationContent:
    milestone = TimelineMilestone(
        id=new_id(),
        role="New Role",
        company="Company",
        dateRange="YYYY - YYYY",
        description="",
        phase=CareerPhase.EARLY,
        shape=shape,
        color=color or None,
    )
    return replace_timeline(content, [*content.timeline, milestone])


def update_milestone(content: PresentationContent, milestone_id: str, **patch: Any) -> PresentationContent:
    if "position" in patch and isinstance(patch["position"], dict):
        patch["position"] = Position(**patch["position"])
    for m in content.timeline:
        if m.id == milestone_id:
            return replace_timeline(content, _replace_by_id(content.timeline, milestone_id, patch))
        if any(c.id == milestone_id for c in m.children or []):
            children = _replace_by_id(m.children, milestone_id, patch)
            return replace_timeline(content, _replace_by_id(content.timeline, m.id, {"children": children}))
    raise UnknownNodeError(milestone_id)


def remove_milestone(content: PresentationContent, milestone_id: str) -> PresentationContent:
    return replace_timeline(content, _without_id(content.timeline, milestone_id))


def set_logo_url(content: PresentationContent, milestone_id: str, url: str) -> PresentationContent:
    return update_milestone(content, milestone_id, logoUrl=url)


def add_child_milestone(content: PresentationContent, parent_id: str) -> PresentationContent:
    parent = next((m for m in content.timeline if m.id == parent_id), None)
    if parent is None:
        raise UnknownNodeError(parent_id)
    child = TimelineMilestone(
        id=new_id(),
        role="New Role",
        company="Company",
        dateRange="YYYY - YYYY",
        phase=parent.phase,
    )
    children = [*(parent.children or []), child]
    return update_milestone(content, parent_id, children=children)


def remove_child_milestone(content: PresentationContent, parent_id: str, child_id: str) -> PresentationContent:
    parent = next((m for m in content.timeline if m.id == parent_id), None)
    if parent is None:
        raise UnknownNodeError(parent_id)
    children = _without_id(parent.children or [], child_id)
    return update_milestone(content, parent_id, children=children or None)


# ==========================================
# Skills / projects
# ==========================================

def add_skill(content: PresentationContent) -> PresentationContent:
    skill = SkillBadge(id=new_id(), name="New Skill", category=SkillCategory.OTHER)
    return content.model_copy(update={"skills": [*content.skills, skill]})


def update_skill(content: PresentationContent, skill_id: str, **patch: Any) -> PresentationContent:
    return content.model_copy(update={"skills": _replace_by_id(content.skills, skill_id, patch)})


def remove_skill(content: PresentationContent, skill_id: str) -> PresentationContent:
    return content.model_copy(update={"skills": _without_id(content.skills, skill_id)})


def add_project(content: PresentationContent) -> PresentationContent:
    project = ProjectCard(id=new_id(), title="New Project", description="", outcomes=[])
    return content.model_copy(update={"projects": [*content.projects, project]})


def update_project(content: PresentationContent, project_id: str, **patch: Any) -> PresentationContent:
    return content.model_copy(update={"projects": _replace_by_id(content.projects, project_id, patch)})


def remove_project(content: PresentationContent, project_id: str) -> PresentationContent:
    return content.model_copy(update={"projects": _without_id(content.projects, project_id)})


def _project(content: PresentationContent, project_id: str) -> ProjectCard:
    project = next((p for p in content.projects if p.id == project_id), None)
    if project is None:
        raise UnknownNodeError(project_id)
    return project


def add_project_outcome(content: PresentationContent, project_id: str) -> PresentationContent:
    outcomes = [*_project(content, project_id).outcomes, ""]
    return update_project(content, project_id, outcomes=outcomes)


def update_project_outcome(content: PresentationContent, project_id: str, index: int, text: str) -> PresentationContent:
    outcomes = list(_project(content, project_id).outcomes)
    _check_index(outcomes, index)
    outcomes[index] = text
    return update_project(content, project_id, outcomes=outcomes)


def remove_project_outcome(content: PresentationContent, project_id: str, index: int) -> PresentationContent:
    current = _project(content, project_id).outcomes
    _check_index(current, index)
    outcomes = [o for i, o in enumerate(current) if i != index]
    return update_project(content, project_id, outcomes=outcomes)


# ==========================================
# Career path steps / lessons / goals
# ==========================================

def _steps(content: PresentationContent) -> CareerPathStepsContent:
    if content.careerPathSteps is None:
        raise UnknownNodeError("careerPathSteps")
    return content.careerPathSteps


def add_career_path_step(content: PresentationContent) -> PresentationContent:
    if content.careerPathSteps is None:
        return content
    steps = content.careerPathSteps.steps
    step = CareerPathStep(id=new_id(), number=len(steps) + 1, title="New step", description="")
    return update_career_path_steps(content, steps=[*steps, step])


def update_career_path_step(content: PresentationContent, step_id: str, **patch: Any) -> PresentationContent:
    if "number" in patch:
        patch["number"] = coerce_number(patch["number"])
    return update_career_path_steps(content, steps=_replace_by_id(_steps(content).steps, step_id, patch))


def remove_career_path_step(content: PresentationContent, step_id: str) -> PresentationContent:
    if content.careerPathSteps is None:
        return content
    return update_career_path_steps(content, steps=_without_id(content.careerPathSteps.steps, step_id))


def add_lesson(content: PresentationContent) -> PresentationContent:
    lesson = LessonLearned(
        id=new_id(),
        number=len(content.lessons) + 1,
        headline="New Lesson",
        paragraph="",
        icon=LESSON_ICONS[0],
    )
    return content.model_copy(update={"lessons": [*content.lessons, lesson]})


def update_lesson(content: PresentationContent, lesson_id: str, **patch: Any) -> PresentationContent:
    if "number" in patch:
        patch["number"] = coerce_number(patch["number"])
    return content.model_copy(update={"lessons": _replace_by_id(content.lessons, lesson_id, patch)})


def remove_lesson(content: PresentationContent, lesson_id: str) -> PresentationContent:
    return content.model_copy(update={"lessons": _without_id(content.lessons, lesson_id)})


def add_future_goal(content: PresentationContent) -> PresentationContent:
    goals = [*content.futureGoals.goals, FutureGoal(id=new_id(), title="New Goal", description="")]
    return update_future_goals(content, goals=goals)


def update_future_goal(content: PresentationContent, goal_id: str, **patch: Any) -> PresentationContent:
    return update_future_goals(content, goals=_replace_by_id(content.futureGoals.goals, goal_id, patch))


def remove_future_goal(content: PresentationContent, goal_id: str) -> PresentationContent:
    return update_future_goals(content, goals=_without_id(content.futureGoals.goals, goal_id))
