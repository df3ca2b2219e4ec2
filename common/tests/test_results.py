from decimal import Decimal
from unittest import mock

from django.db import DatabaseError
from django.test import SimpleTestCase
from django.urls import reverse
from rest_framework.test import APITestCase

from common.api.exceptions import exception_handler
from common.results import ActionResult, ErrorKind, persistence_guard, result_response
from offers.models import Offer
from problems.models import Problem
from products.models import Product


class ActionResultTests(SimpleTestCase):
    def test_result_response_status_codes(self):
        self.assertEqual(result_response(ActionResult.ok({"a": 1})).status_code, 200)
        self.assertEqual(result_response(ActionResult.ok()).status_code, 204)
        self.assertEqual(result_response(ActionResult.ok(1), render=lambda v: {"v": v}, success_status=201).data, {"v": 1})
        self.assertEqual(result_response(ActionResult.invalid("bad")).status_code, 400)
        self.assertEqual(result_response(ActionResult.not_found("gone")).status_code, 404)
        self.assertEqual(result_response(ActionResult.fail(ErrorKind.PERSISTENCE, "db")).status_code, 500)

    def test_error_bodies(self):
        self.assertEqual(result_response(ActionResult.not_found("gone")).data, {"detail": "gone"})
        field_errors = {"name": ["required"]}
        self.assertEqual(result_response(ActionResult.invalid(field_errors)).data, field_errors)

    def test_persistence_guard_turns_database_error_into_failure(self):
        @persistence_guard("Failed to do it")
        def broken():
            raise DatabaseError("disk full")

        with self.assertLogs("common.results", level="ERROR"):
            result = broken()
        self.assertFalse(result.success)
        self.assertEqual(result.kind, ErrorKind.PERSISTENCE)
        self.assertEqual(result.error, "Failed to do it")

    def test_persistence_guard_lets_other_errors_through(self):
        @persistence_guard("Failed")
        def buggy():
            raise KeyError("x")

        with self.assertRaises(KeyError):
            buggy()

    def test_exception_handler_maps_database_error(self):
        with self.assertLogs("common.api.exceptions", level="ERROR"):
            try:
                raise DatabaseError("boom")
            except DatabaseError as exc:
                res = exception_handler(exc, {"view": None})
        self.assertEqual(res.status_code, 500)
        self.assertEqual(res.data, {"detail": "Internal Server Error"})

    def test_exception_handler_ignores_unrelated_errors(self):
        self.assertIsNone(exception_handler(ValueError("x"), {}))


class PersistenceErrorOverHttpTests(APITestCase):
    def setUp(self):
        self.offer = Offer.objects.create(name="X")

    def test_service_failure_is_500_and_nothing_written(self):
        url = reverse("offer-products", kwargs={"offer_id": self.offer.pk})
        with mock.patch("products.services.refresh_total_value", side_effect=DatabaseError("boom")):
            with self.assertLogs("common.results", level="ERROR"):
                res = self.client.post(url, {"name": "P", "value": "10.00"}, format="json")
        self.assertEqual(res.status_code, 500)
        self.assertEqual(res.data, {"detail": "Failed to create product"})
        self.assertFalse(Product.objects.exists())
        self.offer.refresh_from_db()
        self.assertEqual(self.offer.total_value, Decimal("0"))

    def test_generic_view_failure_is_500(self):
        url = reverse("offer-problems", kwargs={"offer_id": self.offer.pk})
        with mock.patch.object(Problem.objects, "filter", side_effect=DatabaseError("boom")):
            with self.assertLogs("common.api.exceptions", level="ERROR"):
                res = self.client.get(url)
        self.assertEqual(res.status_code, 500)
        self.assertEqual(res.data, {"detail": "Internal Server Error"})
