from django.urls import path
from .views import InventoryListCreateAPIView, InventoryRetrieveUpdateDestroyAPIView

urlpatterns = [
    path("inventory/", InventoryListCreateAPIView.as_view(), name="inventory-list"),
    path("inventory/<int:pk>/", InventoryRetrieveUpdateDestroyAPIView.as_view(), name="inventory-detail"),
]
