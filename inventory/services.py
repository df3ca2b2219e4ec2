"""Inventory service layer."""

from django.db import transaction

from common.results import ActionResult, persistence_guard

from .models import InventoryProduct


@persistence_guard("Failed to delete inventory product")
def delete_inventory_product(item_id) -> ActionResult:
    """Delete an inventory item; source products lose their inventory flag."""
    with transaction.atomic():
        item = InventoryProduct.objects.filter(pk=item_id).first()
        if item is None:
            return ActionResult.not_found("Inventory product not found.")
        item.products.update(is_added_to_inventory=False, inventory_product=None)
        item.delete()
    return ActionResult.ok()
