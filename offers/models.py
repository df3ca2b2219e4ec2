"""Offers app models.

Defines the Offer model: the top-level bundle that owns problems and products.
Besides the commercial fields it stores the stack-slide customization as a
theme key plus nullable per-field overrides (colors and marketing copy); see
`offers.customization` for how those are resolved.
"""

from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models


class Offer(models.Model):
    """Represents an offer being built (problems, products, launch metadata)."""

    class Status(models.TextChoices):
        DRAFT = "DRAFT", "Draft"
        IN_PROGRESS = "IN_PROGRESS", "In progress"
        READY = "READY", "Ready"
        LAUNCHED = "LAUNCHED", "Launched"

    class Template(models.TextChoices):
        CLASSIC_STACK = "classic-stack", "Classic Stack"
        MINIMAL_STACK = "minimal-stack", "Minimal Stack"
        BOLD_STACK = "bold-stack", "Bold Stack"

    name = models.CharField(max_length=200)
    topic = models.CharField(max_length=200, blank=True, null=True)
    description = models.TextField(blank=True, null=True)
    tags = models.JSONField(default=list, blank=True)

    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal("0"),
        validators=[MinValueValidator(Decimal("0"))],
    )
    # Derived: always the sum of the products' values.
    total_value = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0"))

    status = models.CharField(max_length=20, choices=Status.choices, default=Status.DRAFT)
    launch_date = models.DateField(blank=True, null=True)

    template = models.CharField(
        max_length=20, choices=Template.choices, default=Template.CLASSIC_STACK
    )
    theme_name = models.CharField(max_length=50, default="classic-green")

    custom_primary = models.CharField(max_length=32, blank=True, null=True)
    custom_secondary = models.CharField(max_length=32, blank=True, null=True)
    custom_accent = models.CharField(max_length=32, blank=True, null=True)
    custom_text = models.CharField(max_length=32, blank=True, null=True)
    custom_background = models.CharField(max_length=32, blank=True, null=True)
    custom_border = models.CharField(max_length=32, blank=True, null=True)

    custom_header_text = models.CharField(max_length=255, blank=True, null=True)
    custom_total_value_label = models.CharField(max_length=100, blank=True, null=True)
    custom_price_label = models.CharField(max_length=100, blank=True, null=True)
    custom_button_text = models.CharField(max_length=100, blank=True, null=True)
    custom_bonus_badge = models.CharField(max_length=50, blank=True, null=True)
    custom_value_label = models.CharField(max_length=50, blank=True, null=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "offers"
        ordering = ["-created_at", "-id"]

    def __str__(self):
        return f"{self.name} (#{self.pk})"
