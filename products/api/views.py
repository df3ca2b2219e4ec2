"""Products API views.

List (by stack order) and create the products of an offer, retrieve, patch
and delete single products, reorder an offer's stack and copy a product into
the inventory. Writes go through products.services so the offer's
total_value and the stack order stay consistent.
"""

from django.shortcuts import get_object_or_404
from rest_framework import generics, status
from rest_framework.response import Response
from rest_framework.views import APIView

from common.results import result_response
from inventory.api.serializers import InventoryProductSerializer
from offers.models import Offer
from .. import services
from ..models import Product
from .serializers import ProductReorderSerializer, ProductSerializer, ProductWriteSerializer


def _product_queryset():
    return Product.objects.all().prefetch_related("tasks__subtasks")


def _render_product(product):
    return ProductSerializer(_product_queryset().get(pk=product.pk)).data


class OfferProductListCreateAPIView(generics.ListCreateAPIView):
    """GET: products of an offer ordered by stack position. POST: append a product."""

    def get_serializer_class(self):
        return ProductWriteSerializer if self.request.method == "POST" else ProductSerializer

    def get_queryset(self):
        offer = get_object_or_404(Offer, pk=self.kwargs["offer_id"])
        return _product_queryset().filter(offer=offer).order_by("order", "id")

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = services.create_product(self.kwargs["offer_id"], serializer.validated_data)
        return result_response(result, render=_render_product, success_status=status.HTTP_201_CREATED)


class ProductRetrieveUpdateDestroyAPIView(generics.RetrieveUpdateDestroyAPIView):
    """GET/PATCH/DELETE a single product."""

    queryset = _product_queryset()

    def get_serializer_class(self):
        if self.request.method in ["PATCH", "PUT"]:
            return ProductWriteSerializer
        return ProductSerializer

    def update(self, request, *args, **kwargs):
        """Always partial; only the provided fields are written."""
        instance = self.get_object()
        serializer = self.get_serializer(instance, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        data = {k: v for k, v in serializer.validated_data.items() if k in request.data}
        result = services.update_product(instance.pk, data)
        return result_response(result, render=_render_product)

    def destroy(self, request, *args, **kwargs):
        instance = self.get_object()
        return result_response(services.delete_product(instance.pk))


class ProductReorderAPIView(APIView):
    """POST /api/offers/{offer_id}/products/reorder/ with {"product_ids": [...]}."""

    def post(self, request, offer_id: int):
        serializer = ProductReorderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = services.reorder_products(offer_id, serializer.validated_data["product_ids"])
        if not result.success:
            return result_response(result)
        products = _product_queryset().filter(offer_id=offer_id).order_by("order", "id")
        return Response(ProductSerializer(products, many=True).data, status=status.HTTP_200_OK)


class ProductAddToInventoryAPIView(APIView):
    """POST /api/products/{pk}/add-to-inventory/ -> the created inventory product."""

    def post(self, request, pk: int):
        result = services.add_product_to_inventory(pk)
        return result_response(
            result,
            render=lambda item: InventoryProductSerializer(item).data,
            success_status=status.HTTP_201_CREATED,
        )
