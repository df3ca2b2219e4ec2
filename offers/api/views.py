"""Offers API views.

List and create offers on the same endpoint with pagination, searching and
filtering; create a complete offer from the wizard. Retrieve, patch and
delete are provided on the offer detail route, plus the derived views of an
offer: totals recalculation, value-stack/progress statistics, the
stack-slide customization and the preview data contract. The theme catalogue
is exposed for the customization editor.
"""

from django.db.models import Count, Q
from django.shortcuts import get_object_or_404
from rest_framework import generics, status
from rest_framework.exceptions import ValidationError
from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response
from rest_framework.views import APIView

from common.results import result_response
from .. import services
from ..customization import COLOR_THEMES, DEFAULT_TEXT, TEMPLATE_DESCRIPTIONS, resolve_customization
from ..models import Offer
from ..progress import STATUS_FLOW, offer_progress
from ..value_stack import calculate_value_stack
from .serializers import (
    CustomizationInputSerializer,
    FullOfferSerializer,
    OfferCreateSerializer,
    OfferDetailViewSerializer,
    OfferListSerializer,
    OfferPatchSerializer,
    value_stack_payload,
)


class OffersPagination(PageNumberPagination):
    """Default pagination for offers with an adjustable page size via query param."""

    page_size = 10
    page_size_query_param = "page_size"
    max_page_size = 100


# ----------------------------- helpers (module-level) -----------------------------

def _offer_with_children():
    return Offer.objects.all().prefetch_related(
        "problems__products",
        "products__tasks__subtasks",
    )


def _ordered_products(offer):
    return sorted(offer.products.all(), key=lambda p: (p.order, p.id))


def _render_offer(offer):
    return OfferDetailViewSerializer(_offer_with_children().get(pk=offer.pk)).data


def _product_line(product):
    return {
        "id": product.id,
        "name": product.name,
        "description": product.description,
        "value": float(product.value),
        "delivery_format": product.delivery_format,
        "is_bonus": product.is_bonus,
    }


# --------------------------------------- views ---------------------------------------

class OfferListCreateAPIView(generics.ListCreateAPIView):
    """GET: paginated list with filters; POST: create a DRAFT offer."""

    queryset = Offer.objects.all()
    pagination_class = OffersPagination

    def get_serializer_class(self):
        """Use list serializer for GET and creation serializer for POST."""
        if self.request.method == "GET":
            return OfferListSerializer
        return OfferCreateSerializer

    def get_queryset(self):
        qs = self._annotate_base(super().get_queryset())
        qs = self._apply_filters(qs, self.request.query_params)
        return self._apply_ordering(qs, self.request.query_params.get("ordering"))

    # --- helpers ---
    def _annotate_base(self, qs):
        return qs.annotate(
            _product_count=Count("products", distinct=True),
            _total_tasks=Count("products__tasks", distinct=True),
            _completed_tasks=Count(
                "products__tasks",
                filter=Q(products__tasks__status="COMPLETED"),
                distinct=True,
            ),
        )

    def _apply_filters(self, qs, params):
        status_value = params.get("status")
        if status_value is not None:
            if status_value not in Offer.Status.values:
                raise ValidationError({"status": f"Allowed values: {', '.join(Offer.Status.values)}."})
            qs = qs.filter(status=status_value)

        search = params.get("search")
        if search:
            qs = qs.filter(
                Q(name__icontains=search) | Q(topic__icontains=search) | Q(description__icontains=search)
            )
        return qs

    def _apply_ordering(self, qs, ordering):
        if not ordering:
            return qs.order_by("-created_at", "-id")

        allowed = {
            "created_at", "-created_at",
            "updated_at", "-updated_at",
            "price", "-price",
            "total_value", "-total_value",
        }
        if ordering not in allowed:
            raise ValidationError({"ordering": f"Allowed values: {', '.join(sorted(allowed))}."})
        return qs.order_by(ordering, "id")


class OfferFullCreateAPIView(APIView):
    """POST /api/offers/full/ -> create offer, problems and products at once."""

    def post(self, request):
        serializer = FullOfferSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = services.create_full_offer(dict(serializer.validated_data))
        return result_response(result, render=_render_offer, success_status=status.HTTP_201_CREATED)


class OfferRetrieveUpdateDestroyAPIView(generics.RetrieveUpdateDestroyAPIView):
    """GET: retrieve offer, PATCH/PUT: partial update, DELETE: remove with everything it owns."""

    queryset = _offer_with_children()

    def get_serializer_class(self):
        """Use the appropriate serializer for GET vs. PATCH/PUT."""
        if self.request.method in ["PATCH", "PUT"]:
            return OfferPatchSerializer
        return OfferDetailViewSerializer

    def update(self, request, *args, **kwargs):
        """Perform a partial update and return the full offer payload."""
        instance = self.get_object()
        serializer = self.get_serializer(instance, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        self.perform_update(serializer)
        return Response(_render_offer(instance), status=status.HTTP_200_OK)

    def destroy(self, request, *args, **kwargs):
        """Delete the offer and respond with 204 No Content."""
        instance = self.get_object()
        self.perform_destroy(instance)
        return Response(status=status.HTTP_204_NO_CONTENT)


class OfferRecalculateAPIView(APIView):
    """POST /api/offers/{pk}/recalculate/ -> {"total_value": <float>}."""

    def post(self, request, pk: int):
        result = services.recalculate_offer_totals(pk)
        return result_response(result, render=lambda total: {"total_value": float(total)})


class OfferStatsAPIView(APIView):
    """GET /api/offers/{pk}/stats/ -> value stack and task progress rollup."""

    def get(self, request, pk: int):
        offer = get_object_or_404(_offer_with_children(), pk=pk)
        products = _ordered_products(offer)
        data = {
            "offer_id": offer.id,
            "status": offer.status,
            "price": float(offer.price),
            "value_stack": value_stack_payload(offer, products),
            "progress": offer_progress(products).as_dict(),
        }
        return Response(data, status=status.HTTP_200_OK)


class OfferCustomizationAPIView(APIView):
    """GET: resolved customization. PUT/PATCH: save editor state, return re-resolved."""

    def get(self, request, pk: int):
        offer = get_object_or_404(Offer, pk=pk)
        return Response(resolve_customization(offer).as_dict(), status=status.HTTP_200_OK)

    def put(self, request, pk: int):
        serializer = CustomizationInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = services.save_customization(pk, serializer.to_customization())
        return result_response(result, render=lambda c: c.as_dict())

    patch = put


class OfferPreviewAPIView(APIView):
    """GET /api/offers/{pk}/preview/ -> everything the stack slide renders."""

    def get(self, request, pk: int):
        offer = get_object_or_404(_offer_with_children(), pk=pk)
        customization = resolve_customization(offer)
        stack = calculate_value_stack(_ordered_products(offer), offer.price)
        data = {
            "offer_id": offer.id,
            "name": offer.name,
            "customization": customization.as_dict(),
            "template": dict(TEMPLATE_DESCRIPTIONS.get(customization.template, {}), key=customization.template),
            "main_products": [_product_line(p) for p in stack.main_products],
            "bonuses": [_product_line(p) for p in stack.bonuses],
            "total_value": float(stack.total_value),
            "price": float(offer.price),
            "value_multiplier": float(stack.value_multiplier),
        }
        return Response(data, status=status.HTTP_200_OK)


class ThemeListAPIView(APIView):
    """GET /api/themes/ -> color themes, templates, default copy and status flow."""

    def get(self, request):
        data = {
            "themes": [dict(theme.as_dict(), key=key) for key, theme in COLOR_THEMES.items()],
            "templates": [dict(meta, key=key) for key, meta in TEMPLATE_DESCRIPTIONS.items()],
            "default_text": DEFAULT_TEXT.as_dict(),
            "statuses": [str(s) for s in STATUS_FLOW],
        }
        return Response(data, status=status.HTTP_200_OK)
