from django.db.models import Count
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework import status

from inventory.models import InventoryProduct
from offers.models import Offer
from products.models import Product


class BaseInfoAPIView(APIView):
    """
    GET /api/base-info/

    Returns workspace-wide aggregate statistics:
    - offer_count: total number of offers
    - offers_by_status: offer count per status, every status present (0 if none)
    - product_count: number of products across all offers
    - inventory_product_count: number of reusable inventory products
    """

    def get(self, request):
        by_status = {value: 0 for value in Offer.Status.values}
        for row in Offer.objects.order_by().values("status").annotate(n=Count("id")):
            by_status[row["status"]] = row["n"]

        data = {
            "offer_count": sum(by_status.values()),
            "offers_by_status": by_status,
            "product_count": Product.objects.count(),
            "inventory_product_count": InventoryProduct.objects.count(),
        }
        return Response(data, status=status.HTTP_200_OK)
