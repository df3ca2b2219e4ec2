from django.contrib import admin
from .models import Problem


@admin.register(Problem)
class ProblemAdmin(admin.ModelAdmin):
    list_display = ("id", "title", "offer", "emotional_hook", "created_at")
    list_select_related = ("offer",)
    search_fields = ("title", "description", "emotional_hook", "offer__name")
    ordering = ("-created_at", "-id")
