"""Inventory app models.

InventoryProduct is a reusable product template that lives independently of
any offer. Offer products copied into the inventory keep a provenance link to
it (products.Product.inventory_product).
"""

from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models


class InventoryProduct(models.Model):
    """Reusable product template."""

    name = models.CharField(max_length=200)
    description = models.TextField(blank=True, null=True)
    value = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0"))],
    )
    delivery_format = models.CharField(max_length=100, blank=True, null=True)
    solution = models.TextField(blank=True, null=True)
    tags = models.JSONField(default=list, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "inventory_products"
        ordering = ["-created_at", "-id"]

    def __str__(self):
        return f"{self.name} (#{self.pk})"
