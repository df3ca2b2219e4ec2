"""Tasks API serializers.

Output serializers nest subtasks (by order) inside tasks and report the
per-task checklist completion. Input serializers keep `status` out of task
creation (new tasks always start as TODO) and keep `order` out of subtask
patches (ordering changes only through the reorder endpoint).
"""

from rest_framework import serializers

from offers.progress import subtask_completion
from ..models import SubTask, Task


class SubTaskSerializer(serializers.ModelSerializer):
    class Meta:
        model = SubTask
        fields = ["id", "task", "title", "completed", "order", "created_at", "updated_at"]
        read_only_fields = ["task", "order", "created_at", "updated_at"]


class SubTaskCreateSerializer(serializers.Serializer):
    title = serializers.CharField(max_length=255)


class SubTaskPatchSerializer(serializers.ModelSerializer):
    class Meta:
        model = SubTask
        fields = ["title", "completed"]


class TaskSerializer(serializers.ModelSerializer):
    """Task with its ordered subtasks and checklist completion."""

    subtasks = SubTaskSerializer(many=True, read_only=True)
    subtask_progress = serializers.SerializerMethodField()

    class Meta:
        model = Task
        fields = [
            "id",
            "product",
            "title",
            "description",
            "due_date",
            "status",
            "priority",
            "subtasks",
            "subtask_progress",
            "created_at",
            "updated_at",
        ]

    def get_subtask_progress(self, obj):
        completed, total = subtask_completion(obj)
        return {"completed": completed, "total": total}


class TaskCreateSerializer(serializers.ModelSerializer):
    class Meta:
        model = Task
        fields = ["title", "description", "due_date", "priority"]
        extra_kwargs = {
            "description": {"required": False, "allow_null": True, "allow_blank": True},
            "due_date": {"required": False, "allow_null": True},
            "priority": {"required": False},
        }


class TaskPatchSerializer(serializers.ModelSerializer):
    """Partial task update. Setting COMPLETED is an explicit action here."""

    class Meta:
        model = Task
        fields = ["title", "description", "due_date", "status", "priority"]
        extra_kwargs = {
            "description": {"required": False, "allow_null": True, "allow_blank": True},
            "due_date": {"required": False, "allow_null": True},
        }


class SubTaskReorderSerializer(serializers.Serializer):
    subtask_ids = serializers.ListField(child=serializers.IntegerField(), allow_empty=True)

    def validate_subtask_ids(self, value):
        if len(set(value)) != len(value):
            raise serializers.ValidationError("Duplicate subtask ids.")
        return value
