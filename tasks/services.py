"""Tasks service layer: subtask ordering and completion.

Subtask `order` stays dense and zero-based within a task. Toggling a subtask
only flips its own `completed` flag; the task status is never derived from
its checklist.
"""

from django.db import transaction
from django.db.models import Max

from common.results import ActionResult, persistence_guard

from .models import SubTask, Task


def next_order(task_id) -> int:
    last = SubTask.objects.filter(task_id=task_id).aggregate(m=Max("order"))["m"]
    return 0 if last is None else last + 1


def compact_orders(task_id) -> None:
    for position, subtask in enumerate(SubTask.objects.filter(task_id=task_id).order_by("order", "id")):
        if subtask.order != position:
            subtask.order = position
            subtask.save(update_fields=["order"])


@persistence_guard("Failed to create subtask")
def create_subtask(task_id, title: str) -> ActionResult:
    with transaction.atomic():
        if not Task.objects.filter(pk=task_id).exists():
            return ActionResult.not_found("Task not found.")
        subtask = SubTask.objects.create(task_id=task_id, title=title, order=next_order(task_id))
    return ActionResult.ok(subtask)


@persistence_guard("Failed to delete subtask")
def delete_subtask(subtask_id) -> ActionResult:
    with transaction.atomic():
        subtask = SubTask.objects.filter(pk=subtask_id).first()
        if subtask is None:
            return ActionResult.not_found("Subtask not found.")
        task_id = subtask.task_id
        subtask.delete()
        compact_orders(task_id)
    return ActionResult.ok()


@persistence_guard("Failed to toggle subtask")
def toggle_subtask(subtask_id) -> ActionResult:
    with transaction.atomic():
        subtask = SubTask.objects.select_for_update().filter(pk=subtask_id).first()
        if subtask is None:
            return ActionResult.not_found("Subtask not found.")
        subtask.completed = not subtask.completed
        subtask.save(update_fields=["completed", "updated_at"])
    return ActionResult.ok(subtask)


@persistence_guard("Failed to reorder subtasks")
def reorder_subtasks(task_id, subtask_ids) -> ActionResult:
    """Rewrite `order` for the task's full subtask set in the given sequence."""
    with transaction.atomic():
        if not Task.objects.filter(pk=task_id).exists():
            return ActionResult.not_found("Task not found.")
        subtasks = {s.id: s for s in SubTask.objects.select_for_update().filter(task_id=task_id)}
        if set(subtask_ids) != set(subtasks) or len(subtask_ids) != len(subtasks):
            return ActionResult.invalid(
                {"subtask_ids": ["Must list every subtask of this task exactly once."]}
            )
        for position, sid in enumerate(subtask_ids):
            subtask = subtasks[sid]
            if subtask.order != position:
                subtask.order = position
                subtask.save(update_fields=["order"])
    return ActionResult.ok(list(subtask_ids))
