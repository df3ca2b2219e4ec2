from django.urls import path
from .views import (
    ProductTaskListCreateAPIView,
    ProductTaskStatsAPIView,
    SubTaskReorderAPIView,
    SubTaskRetrieveUpdateDestroyAPIView,
    SubTaskToggleAPIView,
    TaskRetrieveUpdateDestroyAPIView,
    TaskSubTaskListCreateAPIView,
)

urlpatterns = [
    path("products/<int:product_id>/tasks/", ProductTaskListCreateAPIView.as_view(), name="product-tasks"),
    path("products/<int:product_id>/task-stats/", ProductTaskStatsAPIView.as_view(), name="product-task-stats"),
    path("tasks/<int:pk>/", TaskRetrieveUpdateDestroyAPIView.as_view(), name="task-detail"),
    path("tasks/<int:task_id>/subtasks/", TaskSubTaskListCreateAPIView.as_view(), name="task-subtasks"),
    path("tasks/<int:task_id>/subtasks/reorder/", SubTaskReorderAPIView.as_view(), name="subtask-reorder"),
    path("subtasks/<int:pk>/", SubTaskRetrieveUpdateDestroyAPIView.as_view(), name="subtask-detail"),
    path("subtasks/<int:pk>/toggle/", SubTaskToggleAPIView.as_view(), name="subtask-toggle"),
]
