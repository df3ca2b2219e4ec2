"""Tasks app models.

Tasks are the work items needed to build one product; subtasks are an ordered
checklist inside a task. Subtask completion never changes the task status.
"""

from django.db import models

from products.models import Product


class Task(models.Model):
    """A work item for building one product."""

    class Status(models.TextChoices):
        TODO = "TODO", "To do"
        IN_PROGRESS = "IN_PROGRESS", "In progress"
        COMPLETED = "COMPLETED", "Completed"

    class Priority(models.TextChoices):
        LOW = "LOW", "Low"
        MEDIUM = "MEDIUM", "Medium"
        HIGH = "HIGH", "High"

    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name="tasks")
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True, null=True)
    due_date = models.DateField(blank=True, null=True)
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.TODO)
    priority = models.CharField(max_length=10, choices=Priority.choices, default=Priority.MEDIUM)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "tasks"
        ordering = ["-created_at", "-id"]

    def __str__(self):
        return f"Task<{self.id} {self.title} {self.status}>"


class SubTask(models.Model):
    """A checklist entry of a task; `order` is dense and zero-based per task."""

    task = models.ForeignKey(Task, on_delete=models.CASCADE, related_name="subtasks")
    title = models.CharField(max_length=255)
    completed = models.BooleanField(default=False)
    order = models.PositiveIntegerField(default=0)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "subtasks"
        ordering = ["task", "order", "id"]

    def __str__(self):
        mark = "x" if self.completed else " "
        return f"[{mark}] {self.title}"
