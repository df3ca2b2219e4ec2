from django.urls import path
from .views import (
    OfferCustomizationAPIView,
    OfferFullCreateAPIView,
    OfferListCreateAPIView,
    OfferPreviewAPIView,
    OfferRecalculateAPIView,
    OfferRetrieveUpdateDestroyAPIView,
    OfferStatsAPIView,
    ThemeListAPIView,
)

urlpatterns = [
    path("offers/", OfferListCreateAPIView.as_view(), name="offer-list"),
    path("offers/full/", OfferFullCreateAPIView.as_view(), name="offer-create-full"),
    path("offers/<int:pk>/", OfferRetrieveUpdateDestroyAPIView.as_view(), name="offer-detail"),
    path("offers/<int:pk>/recalculate/", OfferRecalculateAPIView.as_view(), name="offer-recalculate"),
    path("offers/<int:pk>/stats/", OfferStatsAPIView.as_view(), name="offer-stats"),
    path("offers/<int:pk>/customization/", OfferCustomizationAPIView.as_view(), name="offer-customization"),
    path("offers/<int:pk>/preview/", OfferPreviewAPIView.as_view(), name="offer-preview"),
    path("themes/", ThemeListAPIView.as_view(), name="theme-list"),
]
