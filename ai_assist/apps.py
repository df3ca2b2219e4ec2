from django.apps import AppConfig


class AiAssistConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "ai_assist"
