from django.urls import path
from .views import (
    NamesAPIView,
    ProblemsAPIView,
    ProductIdeasAPIView,
    SelectProductsAPIView,
    SolutionsAPIView,
    TasksAPIView,
)

urlpatterns = [
    path("ai/problems/", ProblemsAPIView.as_view(), name="ai-problems"),
    path("ai/product-ideas/", ProductIdeasAPIView.as_view(), name="ai-product-ideas"),
    path("ai/select-products/", SelectProductsAPIView.as_view(), name="ai-select-products"),
    path("ai/solutions/", SolutionsAPIView.as_view(), name="ai-solutions"),
    path("ai/tasks/", TasksAPIView.as_view(), name="ai-tasks"),
    path("ai/names/", NamesAPIView.as_view(), name="ai-names"),
]
