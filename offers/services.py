"""Offers service layer.

Write operations that touch more than one row or keep a derived field in
sync. Each public function returns a common.results.ActionResult.
"""

import logging

from django.db import transaction

from common.results import ActionResult, persistence_guard
from problems.models import Problem
from products.models import Product

from .customization import apply_customization_patch, resolve_customization, serialize_customization
from .models import Offer
from .value_stack import sum_values

logger = logging.getLogger(__name__)


# --------------------------- helpers (inside a transaction) ---------------------------

def refresh_total_value(offer_id) -> "Offer":
    """Recompute and persist total_value for one offer; caller owns the transaction."""
    offer = Offer.objects.select_for_update().get(pk=offer_id)
    total = sum_values(Product.objects.filter(offer_id=offer_id).only("value"))
    if offer.total_value != total:
        offer.total_value = total
        offer.save(update_fields=["total_value", "updated_at"])
    return offer


# ------------------------------------- services -------------------------------------

@persistence_guard("Failed to calculate totals")
def recalculate_offer_totals(offer_id) -> ActionResult:
    with transaction.atomic():
        if not Offer.objects.filter(pk=offer_id).exists():
            return ActionResult.not_found("Offer not found.")
        offer = refresh_total_value(offer_id)
    return ActionResult.ok(offer.total_value)


@persistence_guard("Failed to create offer")
def create_full_offer(data: dict) -> ActionResult:
    """Create an offer with its problems and products in one transaction.

    `data["problems"]` items carry a client-side `id`; products reference those
    ids through `problem_id`. Products are stacked in payload order.
    """
    problems_data = data.pop("problems", [])
    products_data = data.pop("products", [])

    client_ids = {p.get("id") for p in problems_data if p.get("id")}
    unknown = sorted(
        {p["problem_id"] for p in products_data if p.get("problem_id") and p["problem_id"] not in client_ids}
    )
    if unknown:
        return ActionResult.invalid({"products": [f"Unknown problem id(s): {', '.join(unknown)}."]})

    with transaction.atomic():
        offer = Offer.objects.create(status=Offer.Status.DRAFT, **data)

        problems_by_client_id = {}
        for p in problems_data:
            client_id = p.pop("id", None)
            problem = Problem.objects.create(offer=offer, **p)
            if client_id:
                problems_by_client_id[client_id] = problem

        for position, p in enumerate(products_data):
            client_problem_id = p.pop("problem_id", None)
            Product.objects.create(
                offer=offer,
                order=position,
                problem=problems_by_client_id.get(client_problem_id),
                **p,
            )

        offer = refresh_total_value(offer.pk)

    logger.info(
        "Created offer #%s with %d problem(s) and %d product(s)",
        offer.pk,
        len(problems_data),
        len(products_data),
    )
    return ActionResult.ok(offer)


@persistence_guard("Failed to save customization")
def save_customization(offer_id, customization) -> ActionResult:
    """Persist the minimal column patch for `customization`; return the re-resolved result."""
    with transaction.atomic():
        offer = Offer.objects.select_for_update().filter(pk=offer_id).first()
        if offer is None:
            return ActionResult.not_found("Offer not found.")
        changed = apply_customization_patch(offer, serialize_customization(customization))
        if changed:
            offer.save(update_fields=changed + ["updated_at"])
    return ActionResult.ok(resolve_customization(offer))
