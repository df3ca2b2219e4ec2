"""Products API serializers.

Output serializers nest the product's tasks; input serializers validate the
value and carry `problem_id`, whose offer membership is checked by the
service layer.
"""

from decimal import Decimal

from rest_framework import serializers

from tasks.api.serializers import TaskSerializer
from ..models import Product


class ProductSerializer(serializers.ModelSerializer):
    """Full product representation including tasks (newest first)."""

    problem_id = serializers.IntegerField(read_only=True, allow_null=True)
    inventory_product_id = serializers.IntegerField(read_only=True, allow_null=True)
    tasks = TaskSerializer(many=True, read_only=True)

    class Meta:
        model = Product
        fields = [
            "id",
            "offer",
            "name",
            "description",
            "value",
            "is_bonus",
            "delivery_format",
            "solution",
            "problem_id",
            "order",
            "is_added_to_inventory",
            "inventory_product_id",
            "tasks",
            "created_at",
            "updated_at",
        ]


class ProductWriteSerializer(serializers.Serializer):
    """Input for creating (all required fields) or patching (partial) a product."""

    name = serializers.CharField(max_length=200)
    description = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    value = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal("0"))
    is_bonus = serializers.BooleanField(required=False, default=False)
    delivery_format = serializers.CharField(max_length=100, required=False, allow_null=True, allow_blank=True)
    solution = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    problem_id = serializers.IntegerField(required=False, allow_null=True)


class ProductReorderSerializer(serializers.Serializer):
    product_ids = serializers.ListField(child=serializers.IntegerField(), allow_empty=True)

    def validate_product_ids(self, value):
        if len(set(value)) != len(value):
            raise serializers.ValidationError("Duplicate product ids.")
        return value
