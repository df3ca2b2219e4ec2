"""Products app models.

A Product is one deliverable of an offer's value stack, either a main product
or a bonus. `order` is the stack position, dense and zero-based per offer.
"""

from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models

from inventory.models import InventoryProduct
from offers.models import Offer
from problems.models import Problem


class Product(models.Model):
    """A deliverable within an offer."""

    offer = models.ForeignKey(Offer, on_delete=models.CASCADE, related_name="products")
    name = models.CharField(max_length=200)
    description = models.TextField(blank=True, null=True)
    value = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0"))],
    )
    is_bonus = models.BooleanField(default=False)
    delivery_format = models.CharField(max_length=100, blank=True, null=True)
    solution = models.TextField(blank=True, null=True)
    problem = models.ForeignKey(
        Problem,
        on_delete=models.SET_NULL,
        related_name="products",
        null=True,
        blank=True,
    )
    order = models.PositiveIntegerField(default=0)

    is_added_to_inventory = models.BooleanField(default=False)
    inventory_product = models.ForeignKey(
        InventoryProduct,
        on_delete=models.SET_NULL,
        related_name="products",
        null=True,
        blank=True,
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "products"
        ordering = ["offer", "order", "id"]

    def __str__(self):
        kind = "bonus" if self.is_bonus else "product"
        return f"{self.name} ({kind} #{self.order} of offer #{self.offer_id})"
