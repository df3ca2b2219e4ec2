"""Stack-slide customization: theme registry, resolver and serializer.

An offer stores its preview customization as a theme key plus nullable
override columns. `resolve_customization` turns those columns into a
render-ready OfferCustomization; `serialize_customization` is the inverse and
produces the minimal column patch for a given customization.

Precedence is an explicit per-field coalesce: an override that is None falls
through to the theme (colors) or to DEFAULT_TEXT (copy). An override equal to
the default is still an override until the customization is serialized again.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Optional

COLOR_FIELDS = ("primary", "secondary", "accent", "text", "background", "border")
TEXT_FIELDS = (
    "header_text",
    "total_value_label",
    "price_label",
    "button_text",
    "bonus_badge",
    "value_label",
)

# customization field -> Offer column
COLOR_OVERRIDE_COLUMNS = MappingProxyType({f: f"custom_{f}" for f in COLOR_FIELDS})
TEXT_OVERRIDE_COLUMNS = MappingProxyType({f: f"custom_{f}" for f in TEXT_FIELDS})

DEFAULT_THEME_KEY = "classic-green"
CUSTOM_THEME_KEY = "custom"
CUSTOM_THEME_LABEL = "Custom"
DEFAULT_TEMPLATE = "classic-stack"


@dataclass(frozen=True)
class ColorTheme:
    """Six-color palette. The display name does not take part in equality."""

    name: str = field(compare=False)
    primary: str
    secondary: str
    accent: str
    text: str
    background: str
    border: str

    def palette(self):
        return tuple(getattr(self, f) for f in COLOR_FIELDS)

    def as_dict(self):
        data = {"name": self.name}
        data.update({f: getattr(self, f) for f in COLOR_FIELDS})
        return data


@dataclass(frozen=True)
class CustomText:
    header_text: str
    total_value_label: str
    price_label: str
    button_text: str
    bonus_badge: str
    value_label: str

    def as_dict(self):
        return {f: getattr(self, f) for f in TEXT_FIELDS}


@dataclass(frozen=True)
class OfferCustomization:
    """Render-ready customization of one offer's stack slide.

    `custom_colors` holds exactly the color overrides that were set on the
    offer (None when there were none). It is bookkeeping for the save path
    and is not part of equality: two customizations that render identically
    compare equal.
    """

    template: str
    color_theme: ColorTheme
    custom_text: CustomText
    custom_colors: Optional[Mapping] = field(default=None, compare=False)

    def as_dict(self):
        return {
            "template": self.template,
            "color_theme": self.color_theme.as_dict(),
            "custom_colors": dict(self.custom_colors) if self.custom_colors is not None else None,
            "custom_text": self.custom_text.as_dict(),
        }


COLOR_THEMES = MappingProxyType(
    {
        "classic-green": ColorTheme(
            name="Classic Green",
            primary="#10b981",
            secondary="#059669",
            accent="#dc2626",
            text="#0f172a",
            background="#ffffff",
            border="#e2e8f0",
        ),
        "blue-professional": ColorTheme(
            name="Blue Professional",
            primary="#3b82f6",
            secondary="#2563eb",
            accent="#f59e0b",
            text="#1e293b",
            background="#ffffff",
            border="#cbd5e1",
        ),
        "purple-modern": ColorTheme(
            name="Purple Modern",
            primary="#a855f7",
            secondary="#9333ea",
            accent="#ec4899",
            text="#0f172a",
            background="#ffffff",
            border="#e2e8f0",
        ),
        "red-bold": ColorTheme(
            name="Red Bold",
            primary="#ef4444",
            secondary="#dc2626",
            accent="#eab308",
            text="#0f172a",
            background="#ffffff",
            border="#e2e8f0",
        ),
        "orange-energy": ColorTheme(
            name="Orange Energy",
            primary="#f97316",
            secondary="#ea580c",
            accent="#06b6d4",
            text="#0f172a",
            background="#ffffff",
            border="#e2e8f0",
        ),
        "dark-mode": ColorTheme(
            name="Dark Mode",
            primary="#8b5cf6",
            secondary="#7c3aed",
            accent="#14b8a6",
            text="#f8fafc",
            background="#0f172a",
            border="#334155",
        ),
    }
)

DEFAULT_TEXT = CustomText(
    header_text="Let Me Show You EVERYTHING You Get When You Order Today!",
    total_value_label="Total Value:",
    price_label="Get Your Copy Today For",
    button_text="YES! RESERVE MY COPY NOW!",
    bonus_badge="BONUS!",
    value_label="Value",
)

TEMPLATE_DESCRIPTIONS = MappingProxyType(
    {
        "classic-stack": {
            "name": "Classic Stack",
            "description": "Traditional Russell Brunson style with bold emphasis on value",
        },
        "minimal-stack": {
            "name": "Minimal Stack",
            "description": "Clean and modern with generous whitespace",
        },
        "bold-stack": {
            "name": "Bold Stack",
            "description": "Large typography and dramatic CTAs for maximum impact",
        },
    }
)


# --------------------------- helpers (pure functions) ---------------------------

def _coalesce(value, fallback):
    return fallback if value is None else value


def _reader(source):
    if isinstance(source, Mapping):
        return source.get
    return lambda name: getattr(source, name, None)


def get_theme(key) -> ColorTheme:
    """Registry lookup that falls back to classic-green for unset or unknown keys."""
    return COLOR_THEMES.get(key or DEFAULT_THEME_KEY) or COLOR_THEMES[DEFAULT_THEME_KEY]


def find_matching_theme(color_theme: ColorTheme) -> Optional[str]:
    """Return the first registry key whose palette equals `color_theme`'s."""
    palette = color_theme.palette()
    for key, theme in COLOR_THEMES.items():
        if theme.palette() == palette:
            return key
    return None


# ---------------------------------- resolver -----------------------------------

def resolve_customization(offer) -> OfferCustomization:
    """Derive the render-ready customization from an offer's stored columns.

    `offer` may be an Offer instance or any object/mapping exposing the
    theme and override fields.
    """
    read = _reader(offer)
    theme_name = read("theme_name")
    base = get_theme(theme_name)
    label = CUSTOM_THEME_LABEL if theme_name == CUSTOM_THEME_KEY else base.name

    overrides = {}
    colors = {}
    for f, column in COLOR_OVERRIDE_COLUMNS.items():
        value = read(column)
        if value is not None:
            overrides[f] = value
        colors[f] = _coalesce(value, getattr(base, f))

    text = {
        f: _coalesce(read(column), getattr(DEFAULT_TEXT, f))
        for f, column in TEXT_OVERRIDE_COLUMNS.items()
    }

    return OfferCustomization(
        template=_coalesce(read("template"), DEFAULT_TEMPLATE),
        color_theme=ColorTheme(name=label, **colors),
        custom_text=CustomText(**text),
        custom_colors=MappingProxyType(overrides) if overrides else None,
    )


# --------------------------------- serializer ----------------------------------

def serialize_customization(customization: OfferCustomization) -> dict:
    """Compute the minimal Offer column patch for a customization.

    A palette equal to a registry entry is stored as that theme key with no
    color overrides. Anything else is stored as the "custom" key; since that
    key resolves on top of the default palette, a color that is not an
    explicit override is written out whenever it differs from the default
    palette. Copy equal to DEFAULT_TEXT is stored as None.
    """
    patch = {"template": customization.template}

    matched = find_matching_theme(customization.color_theme)
    if matched is not None:
        patch["theme_name"] = matched
        for column in COLOR_OVERRIDE_COLUMNS.values():
            patch[column] = None
    else:
        patch["theme_name"] = CUSTOM_THEME_KEY
        fallback = COLOR_THEMES[DEFAULT_THEME_KEY]
        overrides = customization.custom_colors or {}
        for f, column in COLOR_OVERRIDE_COLUMNS.items():
            value = overrides.get(f)
            if value is None:
                resolved = getattr(customization.color_theme, f)
                value = resolved if resolved != getattr(fallback, f) else None
            patch[column] = value

    for f, column in TEXT_OVERRIDE_COLUMNS.items():
        value = getattr(customization.custom_text, f)
        patch[column] = value if value != getattr(DEFAULT_TEXT, f) else None

    return patch


def apply_customization_patch(offer, patch: dict) -> list:
    """Set the patch columns on `offer` in place; return the changed field names."""
    changed = []
    for column, value in patch.items():
        if getattr(offer, column, None) != value:
            setattr(offer, column, value)
            changed.append(column)
    return changed


def build_customization(template, color_theme, custom_colors=None, custom_text=None) -> OfferCustomization:
    """Build a customization from editor input.

    `color_theme` is a full six-color mapping; `custom_colors` (optional) are
    the fields the user overrode and are laid over the palette; missing
    `custom_text` fields take the default copy.
    """
    overrides = {f: v for f, v in (custom_colors or {}).items() if f in COLOR_FIELDS and v is not None}
    colors = {f: overrides.get(f, color_theme[f]) for f in COLOR_FIELDS}
    provisional = ColorTheme(name=CUSTOM_THEME_LABEL, **colors)
    matched = find_matching_theme(provisional)
    name = COLOR_THEMES[matched].name if matched is not None else CUSTOM_THEME_LABEL

    text = custom_text or {}
    return OfferCustomization(
        template=template or DEFAULT_TEMPLATE,
        color_theme=ColorTheme(name=name, **colors),
        custom_text=CustomText(**{f: _coalesce(text.get(f), getattr(DEFAULT_TEXT, f)) for f in TEXT_FIELDS}),
        custom_colors=MappingProxyType(overrides) if overrides else None,
    )
