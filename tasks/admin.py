from django.contrib import admin
from django.db import transaction

from .models import SubTask, Task
from .services import compact_orders, next_order


class SubTaskInline(admin.TabularInline):
    """
    Checkliste der Aufgabe, sortiert nach order. Die Reihenfolge vergibt
    TaskAdmin beim Speichern.
    """
    model = SubTask
    extra = 0
    fields = ("order", "title", "completed")
    readonly_fields = ("order",)
    ordering = ("order", "id")


@admin.register(Task)
class TaskAdmin(admin.ModelAdmin):
    inlines = [SubTaskInline]

    list_display = ("id", "title", "product", "status", "priority", "due_date", "updated_at")
    list_select_related = ("product",)
    search_fields = ("title", "description", "product__name")
    list_filter = ("status", "priority")
    ordering = ("-created_at", "-id")

    def save_formset(self, request, form, formset, change):
        if formset.model is not SubTask:
            return super().save_formset(request, form, formset, change)

        task_id = form.instance.pk
        with transaction.atomic():
            instances = formset.save(commit=False)
            for subtask in formset.deleted_objects:
                subtask.delete()
            # neue Einträge hinten anhängen
            for subtask in instances:
                if subtask.pk is None:
                    subtask.order = next_order(task_id)
                subtask.save()
            formset.save_m2m()
            compact_orders(task_id)
