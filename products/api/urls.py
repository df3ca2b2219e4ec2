from django.urls import path
from .views import (
    OfferProductListCreateAPIView,
    ProductAddToInventoryAPIView,
    ProductReorderAPIView,
    ProductRetrieveUpdateDestroyAPIView,
)

urlpatterns = [
    path("offers/<int:offer_id>/products/", OfferProductListCreateAPIView.as_view(), name="offer-products"),
    path("offers/<int:offer_id>/products/reorder/", ProductReorderAPIView.as_view(), name="product-reorder"),
    path("products/<int:pk>/", ProductRetrieveUpdateDestroyAPIView.as_view(), name="product-detail"),
    path(
        "products/<int:pk>/add-to-inventory/",
        ProductAddToInventoryAPIView.as_view(),
        name="product-add-to-inventory",
    ),
]
