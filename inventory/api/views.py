"""Inventory API views.

List (newest first, searchable by name/description/tag) and create reusable
inventory products; retrieve, patch and delete single items.
"""

from django.db.models import Q
from rest_framework import generics, status
from rest_framework.response import Response

from common.results import result_response
from .. import services
from ..models import InventoryProduct
from .serializers import InventoryProductSerializer


def _inventory_queryset():
    return InventoryProduct.objects.all().prefetch_related("products__offer")


class InventoryListCreateAPIView(generics.ListCreateAPIView):
    """GET: inventory items. POST: create an inventory item."""

    serializer_class = InventoryProductSerializer

    def get_queryset(self):
        qs = _inventory_queryset()
        search = self.request.query_params.get("search")
        if search:
            qs = qs.filter(Q(name__icontains=search) | Q(description__icontains=search))
        tag = self.request.query_params.get("tag")
        if tag:
            # JSON containment lookups are not portable to SQLite.
            rows = qs.prefetch_related(None).values_list("id", "tags")
            ids = [pk for pk, tags in rows if tag in (tags or [])]
            qs = qs.filter(id__in=ids)
        return qs


class InventoryRetrieveUpdateDestroyAPIView(generics.RetrieveUpdateDestroyAPIView):
    """GET/PATCH/DELETE a single inventory item."""

    queryset = _inventory_queryset()
    serializer_class = InventoryProductSerializer

    def update(self, request, *args, **kwargs):
        instance = self.get_object()
        serializer = self.get_serializer(instance, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        self.perform_update(serializer)
        return Response(serializer.data, status=status.HTTP_200_OK)

    def destroy(self, request, *args, **kwargs):
        instance = self.get_object()
        return result_response(services.delete_inventory_product(instance.pk))
