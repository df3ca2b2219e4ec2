# offers/tests/test_offer_customization_api.py
from decimal import Decimal

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from offers.customization import COLOR_FIELDS, COLOR_THEMES, DEFAULT_TEXT
from offers.models import Offer
from products.models import Product


def palette(key):
    theme = COLOR_THEMES[key]
    return {f: getattr(theme, f) for f in COLOR_FIELDS}


class OfferCustomizationAPITests(APITestCase):
    def setUp(self):
        self.offer = Offer.objects.create(name="X", price=Decimal("100"))
        self.url = reverse("offer-customization", kwargs={"pk": self.offer.pk})

    def test_get_defaults(self):
        res = self.client.get(self.url)
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["template"], "classic-stack")
        self.assertEqual(res.data["color_theme"]["name"], "Classic Green")
        self.assertEqual(res.data["color_theme"]["primary"], "#10b981")
        self.assertIsNone(res.data["custom_colors"])
        self.assertEqual(res.data["custom_text"], DEFAULT_TEXT.as_dict())

    def test_get_reflects_overrides(self):
        self.offer.theme_name = "blue-professional"
        self.offer.custom_primary = "#000000"
        self.offer.save()
        res = self.client.get(self.url)
        self.assertEqual(res.data["color_theme"]["primary"], "#000000")
        self.assertEqual(res.data["color_theme"]["accent"], COLOR_THEMES["blue-professional"].accent)
        self.assertEqual(res.data["custom_colors"], {"primary": "#000000"})

    def test_put_builtin_palette_stores_theme_key_only(self):
        self.offer.custom_accent = "#ff0000"
        self.offer.save()
        payload = {"template": "bold-stack", "color_theme": palette("dark-mode")}
        res = self.client.put(self.url, payload, format="json")
        self.assertEqual(res.status_code, status.HTTP_200_OK, res.data)
        self.offer.refresh_from_db()
        self.assertEqual(self.offer.theme_name, "dark-mode")
        self.assertEqual(self.offer.template, "bold-stack")
        self.assertIsNone(self.offer.custom_accent)
        self.assertEqual(res.data["color_theme"]["name"], "Dark Mode")

    def test_put_theme_name_with_override_stores_custom(self):
        payload = {
            "template": "classic-stack",
            "theme_name": "classic-green",
            "custom_colors": {"accent": "#ff0000"},
            "custom_text": {"button_text": "BUY", "header_text": DEFAULT_TEXT.header_text},
        }
        res = self.client.put(self.url, payload, format="json")
        self.assertEqual(res.status_code, status.HTTP_200_OK, res.data)
        self.offer.refresh_from_db()
        self.assertEqual(self.offer.theme_name, "custom")
        self.assertEqual(self.offer.custom_accent, "#ff0000")
        self.assertIsNone(self.offer.custom_primary)
        self.assertEqual(self.offer.custom_button_text, "BUY")
        self.assertIsNone(self.offer.custom_header_text)
        self.assertEqual(res.data["color_theme"]["accent"], "#ff0000")
        self.assertEqual(res.data["custom_text"]["button_text"], "BUY")

    def test_saving_resolved_state_again_changes_nothing(self):
        first = self.client.put(
            self.url,
            {"template": "minimal-stack", "theme_name": "red-bold", "custom_colors": {"border": "#000000"}},
            format="json",
        ).data
        second = self.client.put(
            self.url,
            {
                "template": first["template"],
                "color_theme": {f: first["color_theme"][f] for f in COLOR_FIELDS},
                "custom_colors": first["custom_colors"],
                "custom_text": first["custom_text"],
            },
            format="json",
        ).data
        self.assertEqual(second["color_theme"], first["color_theme"])
        self.assertEqual(second["color_theme"]["name"], "Custom")
        self.assertEqual(second["custom_text"], first["custom_text"])
        self.offer.refresh_from_db()
        self.assertEqual(self.offer.theme_name, "custom")
        self.assertEqual(self.offer.custom_border, "#000000")
        self.assertIsNone(self.offer.custom_background)

    def test_put_requires_theme_or_palette(self):
        res = self.client.put(self.url, {"template": "classic-stack"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)

    def test_put_invalid_template_400(self):
        res = self.client.put(self.url, {"template": "huge-stack", "theme_name": "red-bold"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)

    def test_unknown_offer_404(self):
        url = reverse("offer-customization", kwargs={"pk": 9999})
        self.assertEqual(self.client.get(url).status_code, status.HTTP_404_NOT_FOUND)
        res = self.client.put(url, {"template": "classic-stack", "theme_name": "red-bold"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)


class OfferPreviewAndThemesTests(APITestCase):
    def test_preview_contract(self):
        offer = Offer.objects.create(
            name="X", price=Decimal("100"), total_value=Decimal("200"), template="minimal-stack"
        )
        Product.objects.create(offer=offer, name="Main", value=Decimal("150"), order=0)
        Product.objects.create(offer=offer, name="Bonus", value=Decimal("50"), is_bonus=True, order=1)

        res = self.client.get(reverse("offer-preview", kwargs={"pk": offer.pk}))
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["template"]["key"], "minimal-stack")
        self.assertEqual(res.data["template"]["name"], "Minimal Stack")
        self.assertEqual([p["name"] for p in res.data["main_products"]], ["Main"])
        self.assertEqual([p["name"] for p in res.data["bonuses"]], ["Bonus"])
        self.assertEqual(res.data["total_value"], 200.0)
        self.assertEqual(res.data["price"], 100.0)
        self.assertEqual(res.data["value_multiplier"], 2.0)
        self.assertEqual(res.data["customization"]["custom_text"]["bonus_badge"], "BONUS!")

    def test_themes_catalogue(self):
        res = self.client.get(reverse("theme-list"))
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(len(res.data["themes"]), 6)
        self.assertEqual(res.data["themes"][0]["key"], "classic-green")
        self.assertEqual(
            [t["key"] for t in res.data["templates"]], ["classic-stack", "minimal-stack", "bold-stack"]
        )
        self.assertEqual(res.data["statuses"], ["DRAFT", "IN_PROGRESS", "READY", "LAUNCHED"])
        self.assertEqual(res.data["default_text"]["total_value_label"], "Total Value:")
