from django.urls import path
from .views import OfferProblemListCreateAPIView, ProblemRetrieveUpdateDestroyAPIView

urlpatterns = [
    path("offers/<int:offer_id>/problems/", OfferProblemListCreateAPIView.as_view(), name="offer-problems"),
    path("problems/<int:pk>/", ProblemRetrieveUpdateDestroyAPIView.as_view(), name="problem-detail"),
]
