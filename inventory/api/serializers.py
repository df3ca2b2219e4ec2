"""Inventory API serializers."""

from decimal import Decimal

from rest_framework import serializers

from ..models import InventoryProduct


class InventoryProductSerializer(serializers.ModelSerializer):
    """Inventory item plus the offer products that were copied into it."""

    value = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal("0"))
    tags = serializers.ListField(child=serializers.CharField(max_length=50), required=False)
    linked_products = serializers.SerializerMethodField()

    class Meta:
        model = InventoryProduct
        fields = [
            "id",
            "name",
            "description",
            "value",
            "delivery_format",
            "solution",
            "tags",
            "linked_products",
            "created_at",
            "updated_at",
        ]
        extra_kwargs = {
            "description": {"required": False, "allow_null": True, "allow_blank": True},
            "delivery_format": {"required": False, "allow_null": True, "allow_blank": True},
            "solution": {"required": False, "allow_null": True, "allow_blank": True},
        }

    def get_linked_products(self, obj):
        return [
            {"id": p.id, "name": p.name, "offer_id": p.offer_id, "offer_name": p.offer.name}
            for p in obj.products.all()
        ]
