"""Problems app models.

A Problem is a pain point the offer addresses. Problems belong to exactly one
offer; products may point at one of them (weak link, see products.Product).
"""

from django.db import models

from offers.models import Offer


class Problem(models.Model):
    """A target-audience problem owned by one offer."""

    offer = models.ForeignKey(Offer, on_delete=models.CASCADE, related_name="problems")
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True, null=True)
    emotional_hook = models.CharField(max_length=255, blank=True, null=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "problems"
        ordering = ["-created_at", "-id"]

    def __str__(self):
        return f"{self.title} (offer #{self.offer_id})"
