"""AI assistant API views.

Every endpoint validates its input, calls the matching operation in
`ai_assist.services` and answers 200 with the payload under a named key plus
`fallback`, which tells the client whether canned data was returned instead
of a model answer.
"""

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from .. import services
from .serializers import (
    NamesRequestSerializer,
    ProblemsRequestSerializer,
    ProductIdeasRequestSerializer,
    SelectProductsRequestSerializer,
    SolutionsRequestSerializer,
    TasksRequestSerializer,
)


class AssistantAPIView(APIView):
    """Shared POST flow: validate, generate, wrap."""

    serializer_class = None
    result_key = None

    def generate(self, data):
        raise NotImplementedError

    def post(self, request):
        serializer = self.serializer_class(data=request.data)
        serializer.is_valid(raise_exception=True)
        payload, used_fallback = self.generate(serializer.validated_data)
        if isinstance(payload, dict):
            body = dict(payload, fallback=used_fallback)
        else:
            body = {self.result_key: payload, "fallback": used_fallback}
        return Response(body, status=status.HTTP_200_OK)


class ProblemsAPIView(AssistantAPIView):
    """POST /api/ai/problems/ -> {"problems": [...], "fallback": bool}."""

    serializer_class = ProblemsRequestSerializer
    result_key = "problems"

    def generate(self, data):
        return services.generate_problems(data["description"], data["topic"])


class ProductIdeasAPIView(AssistantAPIView):
    """POST /api/ai/product-ideas/ -> {"product_ideas": [...], "fallback": bool}."""

    serializer_class = ProductIdeasRequestSerializer
    result_key = "product_ideas"

    def generate(self, data):
        problems = [dict(p) for p in data["problems"]]
        return services.generate_product_ideas(data["description"], problems)


class SelectProductsAPIView(AssistantAPIView):
    """POST /api/ai/select-products/ -> {"main_products", "bonuses", "reasoning", "fallback"}."""

    serializer_class = SelectProductsRequestSerializer

    def generate(self, data):
        ideas = [dict(i, value=float(i["value"])) for i in data["product_ideas"]]
        return services.select_best_products(data["description"], ideas)


class SolutionsAPIView(AssistantAPIView):
    """POST /api/ai/solutions/ -> {"solutions": [...], "fallback": bool}."""

    serializer_class = SolutionsRequestSerializer
    result_key = "solutions"

    def generate(self, data):
        return services.generate_solutions(data["problem"], data["topic"])


class TasksAPIView(AssistantAPIView):
    """POST /api/ai/tasks/ -> {"tasks": [...], "fallback": bool}."""

    serializer_class = TasksRequestSerializer
    result_key = "tasks"

    def generate(self, data):
        return services.generate_tasks(data["product_name"], data["product_description"])


class NamesAPIView(AssistantAPIView):
    """POST /api/ai/names/ -> {"names": [...], "fallback": bool}."""

    serializer_class = NamesRequestSerializer
    result_key = "names"

    def generate(self, data):
        return services.improve_name(data["current_name"], data["context"])
