"""Products service layer.

Every mutation that changes the value stack recomputes `offer.total_value`
inside the same transaction, and every mutation that changes the product set
keeps `order` dense and zero-based.
"""

import logging

from django.db import transaction
from django.db.models import Max

from common.results import ActionResult, persistence_guard
from inventory.models import InventoryProduct
from offers.models import Offer
from offers.services import refresh_total_value
from problems.models import Problem

from .models import Product

logger = logging.getLogger(__name__)

PRODUCT_FIELDS = ("name", "description", "value", "is_bonus", "delivery_format", "solution")


# ----------------------------- helpers (module-level) -----------------------------

def _resolve_problem(offer_id, problem_id):
    """Return (problem, error). A problem must belong to the product's offer."""
    if problem_id is None:
        return None, None
    problem = Problem.objects.filter(pk=problem_id, offer_id=offer_id).first()
    if problem is None:
        return None, {"problem_id": ["Problem does not belong to this offer."]}
    return problem, None


def next_order(offer_id) -> int:
    last = Product.objects.filter(offer_id=offer_id).aggregate(m=Max("order"))["m"]
    return 0 if last is None else last + 1


def compact_orders(offer_id) -> None:
    for position, product in enumerate(Product.objects.filter(offer_id=offer_id).order_by("order", "id")):
        if product.order != position:
            product.order = position
            product.save(update_fields=["order"])


# ------------------------------------- services -------------------------------------

@persistence_guard("Failed to create product")
def create_product(offer_id, data: dict) -> ActionResult:
    data = dict(data)
    with transaction.atomic():
        if not Offer.objects.filter(pk=offer_id).exists():
            return ActionResult.not_found("Offer not found.")
        problem, error = _resolve_problem(offer_id, data.pop("problem_id", None))
        if error:
            return ActionResult.invalid(error)

        product = Product.objects.create(
            offer_id=offer_id,
            problem=problem,
            order=next_order(offer_id),
            **{k: v for k, v in data.items() if k in PRODUCT_FIELDS},
        )
        refresh_total_value(offer_id)
    return ActionResult.ok(product)


@persistence_guard("Failed to update product")
def update_product(product_id, data: dict) -> ActionResult:
    data = dict(data)
    with transaction.atomic():
        product = Product.objects.select_for_update().filter(pk=product_id).first()
        if product is None:
            return ActionResult.not_found("Product not found.")

        changed = []
        if "problem_id" in data:
            problem, error = _resolve_problem(product.offer_id, data.pop("problem_id"))
            if error:
                return ActionResult.invalid(error)
            product.problem = problem
            changed.append("problem")

        for f in PRODUCT_FIELDS:
            if f in data:
                setattr(product, f, data[f])
                changed.append(f)

        if changed:
            product.save(update_fields=changed + ["updated_at"])
        if "value" in changed:
            refresh_total_value(product.offer_id)
    return ActionResult.ok(product)


@persistence_guard("Failed to delete product")
def delete_product(product_id) -> ActionResult:
    """Delete a product (cascading to its tasks) and restack the rest."""
    with transaction.atomic():
        product = Product.objects.filter(pk=product_id).first()
        if product is None:
            return ActionResult.not_found("Product not found.")
        offer_id = product.offer_id
        product.delete()
        compact_orders(offer_id)
        refresh_total_value(offer_id)
    return ActionResult.ok()


@persistence_guard("Failed to reorder products")
def reorder_products(offer_id, product_ids) -> ActionResult:
    """Rewrite `order` for the offer's full product set in the given sequence."""
    with transaction.atomic():
        if not Offer.objects.filter(pk=offer_id).exists():
            return ActionResult.not_found("Offer not found.")
        products = {p.id: p for p in Product.objects.select_for_update().filter(offer_id=offer_id)}
        if set(product_ids) != set(products) or len(product_ids) != len(products):
            return ActionResult.invalid(
                {"product_ids": ["Must list every product of this offer exactly once."]}
            )
        for position, pid in enumerate(product_ids):
            product = products[pid]
            if product.order != position:
                product.order = position
                product.save(update_fields=["order"])
    return ActionResult.ok(list(product_ids))


@persistence_guard("Failed to add product to inventory")
def add_product_to_inventory(product_id) -> ActionResult:
    """Copy a product into the reusable inventory and flag the source product."""
    with transaction.atomic():
        product = Product.objects.select_for_update().filter(pk=product_id).first()
        if product is None:
            return ActionResult.not_found("Product not found.")
        if product.is_added_to_inventory:
            return ActionResult.invalid("Product already in inventory.")

        item = InventoryProduct.objects.create(
            name=product.name,
            description=product.description,
            value=product.value,
            delivery_format=product.delivery_format,
            solution=product.solution,
            tags=[],
        )
        product.is_added_to_inventory = True
        product.inventory_product = item
        product.save(update_fields=["is_added_to_inventory", "inventory_product", "updated_at"])

    logger.info("Product #%s copied to inventory as #%s", product.pk, item.pk)
    return ActionResult.ok(item)
