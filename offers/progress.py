"""Offer lifecycle and task progress rollups.

Status changes are always explicit: nothing here advances an offer or a task
on its own. Completing every subtask leaves the parent task's status alone,
and completing every task leaves the offer's status alone.
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from .models import Offer

STATUS_FLOW = (
    Offer.Status.DRAFT,
    Offer.Status.IN_PROGRESS,
    Offer.Status.READY,
    Offer.Status.LAUNCHED,
)
TERMINAL_STATUSES = frozenset({Offer.Status.LAUNCHED})

TASK_TODO = "TODO"
TASK_IN_PROGRESS = "IN_PROGRESS"
TASK_COMPLETED = "COMPLETED"


@dataclass(frozen=True)
class TaskProgress:
    total: int
    completed: int
    in_progress: int
    todo: int
    total_subtasks: int
    completed_subtasks: int
    progress_percentage: int

    def as_dict(self):
        return {
            "total": self.total,
            "completed": self.completed,
            "in_progress": self.in_progress,
            "todo": self.todo,
            "total_subtasks": self.total_subtasks,
            "completed_subtasks": self.completed_subtasks,
            "progress_percentage": self.progress_percentage,
        }


# ---------------------------------- lifecycle ----------------------------------

def can_transition(current: str, new: str) -> bool:
    """Any explicit change is allowed except leaving a terminal status."""
    return current == new or current not in TERMINAL_STATUSES


def next_status(current: str):
    """The following step of the flow, or None at the end."""
    try:
        idx = STATUS_FLOW.index(current)
    except ValueError:
        return None
    return STATUS_FLOW[idx + 1] if idx + 1 < len(STATUS_FLOW) else None


# ----------------------------------- rollups -----------------------------------

def _children(rel):
    return rel.all() if hasattr(rel, "all") else rel


def percentage(part: int, whole: int) -> int:
    """Whole-number percentage rounded half up; 0 for an empty whole."""
    if whole <= 0:
        return 0
    pct = Decimal(part) * 100 / Decimal(whole)
    return int(pct.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def subtask_completion(task):
    """(completed, total) subtasks of one task."""
    subtasks = list(_children(task.subtasks))
    return sum(1 for s in subtasks if s.completed), len(subtasks)


def task_progress(tasks) -> TaskProgress:
    tasks = list(tasks)
    completed = sum(1 for t in tasks if t.status == TASK_COMPLETED)
    in_progress = sum(1 for t in tasks if t.status == TASK_IN_PROGRESS)
    todo = sum(1 for t in tasks if t.status == TASK_TODO)

    done_subtasks = total_subtasks = 0
    for t in tasks:
        done, total = subtask_completion(t)
        done_subtasks += done
        total_subtasks += total

    return TaskProgress(
        total=len(tasks),
        completed=completed,
        in_progress=in_progress,
        todo=todo,
        total_subtasks=total_subtasks,
        completed_subtasks=done_subtasks,
        progress_percentage=percentage(completed, len(tasks)),
    )


def offer_progress(products) -> TaskProgress:
    """Rollup over every task of every product of an offer."""
    tasks = [t for p in products for t in _children(p.tasks)]
    return task_progress(tasks)
