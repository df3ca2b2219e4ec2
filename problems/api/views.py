"""Problems API views.

List and create the problems of one offer (newest first), and retrieve,
patch or delete a single problem. Deleting a problem only unlinks the
products that pointed at it.
"""

from django.shortcuts import get_object_or_404
from rest_framework import generics, status
from rest_framework.response import Response

from offers.models import Offer
from ..models import Problem
from .serializers import ProblemPatchSerializer, ProblemSerializer


class OfferProblemListCreateAPIView(generics.ListCreateAPIView):
    """GET: problems of an offer. POST: add a problem to the offer."""

    serializer_class = ProblemSerializer

    def get_offer(self):
        if not hasattr(self, "_offer"):
            self._offer = get_object_or_404(Offer, pk=self.kwargs["offer_id"])
        return self._offer

    def get_queryset(self):
        offer = self.get_offer()
        return Problem.objects.filter(offer=offer).prefetch_related("products")

    def perform_create(self, serializer):
        serializer.save(offer=self.get_offer())


class ProblemRetrieveUpdateDestroyAPIView(generics.RetrieveUpdateDestroyAPIView):
    """GET/PATCH/DELETE a single problem."""

    queryset = Problem.objects.all().prefetch_related("products")

    def get_serializer_class(self):
        if self.request.method in ["PATCH", "PUT"]:
            return ProblemPatchSerializer
        return ProblemSerializer

    def update(self, request, *args, **kwargs):
        """Always partial; respond with the full problem."""
        instance = self.get_object()
        serializer = self.get_serializer(instance, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        self.perform_update(serializer)
        return Response(ProblemSerializer(instance).data, status=status.HTTP_200_OK)
