# offers/tests/test_customization.py
from types import MappingProxyType
from unittest import mock

from django.test import SimpleTestCase

from offers.customization import (
    COLOR_FIELDS,
    COLOR_OVERRIDE_COLUMNS,
    COLOR_THEMES,
    DEFAULT_TEXT,
    TEXT_OVERRIDE_COLUMNS,
    ColorTheme,
    build_customization,
    find_matching_theme,
    get_theme,
    resolve_customization,
    serialize_customization,
)
from offers.models import Offer


def palette_of(key):
    theme = COLOR_THEMES[key]
    return {f: getattr(theme, f) for f in COLOR_FIELDS}


def merged(offer: dict, patch: dict) -> dict:
    data = dict(offer)
    data.update(patch)
    return data


class ThemeRegistryTests(SimpleTestCase):
    def test_registry_ships_six_named_themes(self):
        self.assertEqual(
            list(COLOR_THEMES.keys()),
            ["classic-green", "blue-professional", "purple-modern", "red-bold", "orange-energy", "dark-mode"],
        )

    def test_registry_is_read_only(self):
        with self.assertRaises(TypeError):
            COLOR_THEMES["new"] = COLOR_THEMES["classic-green"]

    def test_get_theme_falls_back_to_classic_green(self):
        self.assertIs(get_theme(None), COLOR_THEMES["classic-green"])
        self.assertIs(get_theme(""), COLOR_THEMES["classic-green"])
        self.assertIs(get_theme("nonexistent-key"), COLOR_THEMES["classic-green"])
        self.assertIs(get_theme("dark-mode"), COLOR_THEMES["dark-mode"])

    def test_matching_ignores_display_name(self):
        renamed = ColorTheme(name="Whatever", **palette_of("red-bold"))
        self.assertEqual(find_matching_theme(renamed), "red-bold")

    def test_matching_is_case_sensitive(self):
        colors = palette_of("red-bold")
        colors["primary"] = colors["primary"].upper()
        self.assertIsNone(find_matching_theme(ColorTheme(name="x", **colors)))

    def test_duplicate_palettes_match_first_entry(self):
        twin = ColorTheme(name="Twin", **palette_of("classic-green"))
        registry = MappingProxyType({"alpha": twin, "beta": COLOR_THEMES["classic-green"]})
        with mock.patch("offers.customization.COLOR_THEMES", registry):
            self.assertEqual(find_matching_theme(COLOR_THEMES["classic-green"]), "alpha")


class ResolveCustomizationTests(SimpleTestCase):
    def test_unknown_theme_resolves_to_classic_green(self):
        c = resolve_customization({"theme_name": "nonexistent-key"})
        self.assertEqual(c.color_theme, COLOR_THEMES["classic-green"])
        self.assertIsNone(c.custom_colors)

    def test_override_wins_over_theme(self):
        c = resolve_customization({"theme_name": "blue-professional", "custom_primary": "#000000"})
        expected = dict(palette_of("blue-professional"), primary="#000000")
        self.assertEqual({f: getattr(c.color_theme, f) for f in COLOR_FIELDS}, expected)
        self.assertEqual(dict(c.custom_colors), {"primary": "#000000"})

    def test_unset_theme_with_accent_override(self):
        c = resolve_customization({"theme_name": None, "custom_accent": "#ff0000"})
        expected = dict(palette_of("classic-green"), accent="#ff0000")
        self.assertEqual({f: getattr(c.color_theme, f) for f in COLOR_FIELDS}, expected)

    def test_custom_colors_lists_exactly_the_set_overrides(self):
        c = resolve_customization(
            {"theme_name": "classic-green", "custom_primary": "#10b981", "custom_border": "#000000"}
        )
        self.assertEqual(dict(c.custom_colors), {"primary": "#10b981", "border": "#000000"})

    def test_text_uses_single_default_set_regardless_of_theme(self):
        c = resolve_customization({"theme_name": "dark-mode", "custom_button_text": "BUY NOW"})
        self.assertEqual(c.custom_text.button_text, "BUY NOW")
        self.assertEqual(c.custom_text.header_text, DEFAULT_TEXT.header_text)
        self.assertEqual(c.custom_text.bonus_badge, DEFAULT_TEXT.bonus_badge)

    def test_template_defaults_to_classic_stack(self):
        self.assertEqual(resolve_customization({}).template, "classic-stack")
        self.assertEqual(resolve_customization({"template": "bold-stack"}).template, "bold-stack")

    def test_resolve_is_pure(self):
        offer = {"theme_name": "red-bold", "custom_text": "#111111", "custom_price_label": "Only"}
        self.assertEqual(resolve_customization(offer), resolve_customization(offer))
        self.assertEqual(offer, {"theme_name": "red-bold", "custom_text": "#111111", "custom_price_label": "Only"})

    def test_accepts_model_instance(self):
        offer = Offer(name="X", theme_name="purple-modern", custom_header_text="Look!")
        c = resolve_customization(offer)
        self.assertEqual(c.color_theme, COLOR_THEMES["purple-modern"])
        self.assertEqual(c.color_theme.name, "Purple Modern")
        self.assertEqual(c.custom_text.header_text, "Look!")
        self.assertEqual(c.template, "classic-stack")


class SerializeCustomizationTests(SimpleTestCase):
    def test_builtin_theme_serializes_without_color_overrides(self):
        patch = serialize_customization(resolve_customization({"theme_name": "orange-energy"}))
        self.assertEqual(patch["theme_name"], "orange-energy")
        for column in COLOR_OVERRIDE_COLUMNS.values():
            self.assertIsNone(patch[column])
        for column in TEXT_OVERRIDE_COLUMNS.values():
            self.assertIsNone(patch[column])

    def test_accent_override_becomes_custom_theme(self):
        patch = serialize_customization(resolve_customization({"custom_accent": "#ff0000"}))
        self.assertEqual(patch["theme_name"], "custom")
        self.assertEqual(patch["custom_accent"], "#ff0000")
        for f in ("primary", "secondary", "text", "background", "border"):
            self.assertIsNone(patch[f"custom_{f}"])

    def test_redundant_override_is_normalised_away(self):
        c = resolve_customization({"theme_name": "classic-green", "custom_primary": "#10b981"})
        patch = serialize_customization(c)
        self.assertEqual(patch["theme_name"], "classic-green")
        self.assertIsNone(patch["custom_primary"])

    def test_text_equal_to_default_is_not_stored(self):
        c = resolve_customization(
            {"custom_header_text": DEFAULT_TEXT.header_text, "custom_price_label": "Today only"}
        )
        patch = serialize_customization(c)
        self.assertIsNone(patch["custom_header_text"])
        self.assertEqual(patch["custom_price_label"], "Today only")

    def test_template_is_copied_verbatim(self):
        patch = serialize_customization(resolve_customization({"template": "minimal-stack"}))
        self.assertEqual(patch["template"], "minimal-stack")

    def test_override_on_non_default_theme_keeps_base_colors(self):
        c = resolve_customization({"theme_name": "dark-mode", "custom_accent": "#ff0000"})
        patch = serialize_customization(c)
        self.assertEqual(patch["theme_name"], "custom")
        self.assertEqual(patch["custom_accent"], "#ff0000")
        self.assertEqual(patch["custom_background"], COLOR_THEMES["dark-mode"].background)


class RoundTripTests(SimpleTestCase):
    OFFERS = [
        {},
        {"theme_name": "nonexistent-key"},
        {"theme_name": "blue-professional"},
        {"theme_name": "blue-professional", "custom_primary": "#000000"},
        {"theme_name": "classic-green", "custom_primary": "#10b981"},
        {"custom_accent": "#ff0000"},
        {"theme_name": "dark-mode", "custom_accent": "#ff0000", "custom_text": "#ffffff"},
        {"theme_name": "custom", "custom_primary": "#123456", "custom_border": "#abcdef"},
        {"template": "bold-stack", "custom_header_text": "Hi", "custom_bonus_badge": "FREE"},
    ]

    def test_resolve_serialize_resolve_is_idempotent(self):
        for offer in self.OFFERS:
            with self.subTest(offer=offer):
                resolved = resolve_customization(offer)
                again = resolve_customization(merged(offer, serialize_customization(resolved)))
                self.assertEqual(again, resolved)

    def test_second_serialization_is_stable(self):
        for offer in self.OFFERS:
            with self.subTest(offer=offer):
                first = serialize_customization(resolve_customization(offer))
                second = serialize_customization(resolve_customization(merged(offer, first)))
                self.assertEqual(second, first)


class BuildCustomizationTests(SimpleTestCase):
    def test_palette_matching_a_theme_takes_its_name(self):
        c = build_customization("classic-stack", palette_of("red-bold"))
        self.assertEqual(c.color_theme.name, "Red Bold")
        self.assertIsNone(c.custom_colors)

    def test_overrides_are_laid_over_palette(self):
        c = build_customization(
            "bold-stack",
            palette_of("blue-professional"),
            custom_colors={"accent": "#000000", "border": None},
            custom_text={"button_text": "GO"},
        )
        self.assertEqual(c.color_theme.accent, "#000000")
        self.assertEqual(c.color_theme.name, "Custom")
        self.assertEqual(dict(c.custom_colors), {"accent": "#000000"})
        self.assertEqual(c.custom_text.button_text, "GO")
        self.assertEqual(c.custom_text.value_label, DEFAULT_TEXT.value_label)
