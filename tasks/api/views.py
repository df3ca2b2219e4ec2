"""Tasks API views.

Tasks of a product (newest first) with create/retrieve/patch/delete, a
per-product task statistics endpoint, and subtasks of a task (by order) with
create, patch, delete, toggle and reorder.
"""

from django.shortcuts import get_object_or_404
from rest_framework import generics, status
from rest_framework.response import Response
from rest_framework.views import APIView

from common.results import result_response
from offers.progress import task_progress
from products.models import Product
from .. import services
from ..models import SubTask, Task
from .serializers import (
    SubTaskCreateSerializer,
    SubTaskPatchSerializer,
    SubTaskReorderSerializer,
    SubTaskSerializer,
    TaskCreateSerializer,
    TaskPatchSerializer,
    TaskSerializer,
)


def _task_queryset():
    return Task.objects.all().prefetch_related("subtasks")


# ----------------------------------- tasks -----------------------------------

class ProductTaskListCreateAPIView(generics.ListCreateAPIView):
    """GET: tasks of a product. POST: create a TODO task for the product."""

    def get_product(self):
        if not hasattr(self, "_product"):
            self._product = get_object_or_404(Product, pk=self.kwargs["product_id"])
        return self._product

    def get_serializer_class(self):
        return TaskCreateSerializer if self.request.method == "POST" else TaskSerializer

    def get_queryset(self):
        return _task_queryset().filter(product=self.get_product())

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        task = serializer.save(product=self.get_product(), status=Task.Status.TODO)
        return Response(TaskSerializer(task).data, status=status.HTTP_201_CREATED)


class TaskRetrieveUpdateDestroyAPIView(generics.RetrieveUpdateDestroyAPIView):
    """GET/PATCH/DELETE a single task."""

    queryset = _task_queryset()

    def get_serializer_class(self):
        if self.request.method in ["PATCH", "PUT"]:
            return TaskPatchSerializer
        return TaskSerializer

    def update(self, request, *args, **kwargs):
        instance = self.get_object()
        serializer = self.get_serializer(instance, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        self.perform_update(serializer)
        return Response(TaskSerializer(instance).data, status=status.HTTP_200_OK)


class ProductTaskStatsAPIView(APIView):
    """GET /api/products/{product_id}/task-stats/ -> task and subtask counts."""

    def get(self, request, product_id: int):
        product = get_object_or_404(Product, pk=product_id)
        stats = task_progress(_task_queryset().filter(product=product))
        return Response(stats.as_dict(), status=status.HTTP_200_OK)


# ---------------------------------- subtasks ----------------------------------

class TaskSubTaskListCreateAPIView(generics.ListCreateAPIView):
    """GET: subtasks of a task by order. POST: append a subtask."""

    def get_serializer_class(self):
        return SubTaskCreateSerializer if self.request.method == "POST" else SubTaskSerializer

    def get_queryset(self):
        task = get_object_or_404(Task, pk=self.kwargs["task_id"])
        return SubTask.objects.filter(task=task).order_by("order", "id")

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = services.create_subtask(self.kwargs["task_id"], serializer.validated_data["title"])
        return result_response(
            result,
            render=lambda s: SubTaskSerializer(s).data,
            success_status=status.HTTP_201_CREATED,
        )


class SubTaskRetrieveUpdateDestroyAPIView(generics.RetrieveUpdateDestroyAPIView):
    """GET/PATCH/DELETE a single subtask."""

    queryset = SubTask.objects.all()

    def get_serializer_class(self):
        if self.request.method in ["PATCH", "PUT"]:
            return SubTaskPatchSerializer
        return SubTaskSerializer

    def update(self, request, *args, **kwargs):
        instance = self.get_object()
        serializer = self.get_serializer(instance, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        self.perform_update(serializer)
        return Response(SubTaskSerializer(instance).data, status=status.HTTP_200_OK)

    def destroy(self, request, *args, **kwargs):
        instance = self.get_object()
        return result_response(services.delete_subtask(instance.pk))


class SubTaskToggleAPIView(APIView):
    """POST /api/subtasks/{pk}/toggle/ -> flips `completed`."""

    def post(self, request, pk: int):
        return result_response(services.toggle_subtask(pk), render=lambda s: SubTaskSerializer(s).data)


class SubTaskReorderAPIView(APIView):
    """POST /api/tasks/{task_id}/subtasks/reorder/ with {"subtask_ids": [...]}."""

    def post(self, request, task_id: int):
        serializer = SubTaskReorderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = services.reorder_subtasks(task_id, serializer.validated_data["subtask_ids"])
        if not result.success:
            return result_response(result)
        subtasks = SubTask.objects.filter(task_id=task_id).order_by("order", "id")
        return Response(SubTaskSerializer(subtasks, many=True).data, status=status.HTTP_200_OK)
