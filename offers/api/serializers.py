"""Offers API serializers.

Provide serializers for creating an offer (plain or from the creation
wizard with nested problems and products), listing offers with computed
value-stack and progress fields, retrieving a single offer with its nested
problems/products/tasks, patching an offer (with the status rule), and for
reading/writing the stack-slide customization.
"""

from decimal import Decimal

from rest_framework import serializers

from problems.api.serializers import ProblemSerializer
from products.api.serializers import ProductSerializer
from ..customization import COLOR_FIELDS, COLOR_THEMES, TEXT_FIELDS, build_customization
from ..models import Offer
from ..progress import can_transition, offer_progress, percentage
from ..value_stack import calculate_value_stack, value_multiplier


# --------------------------- helpers (pure functions) ---------------------------

def _as_float(value):
    return float(value) if value is not None else None


def _annotated(obj, attr, default=0):
    v = getattr(obj, attr, None)
    return v if v is not None else default


def value_stack_payload(offer, products):
    stack = calculate_value_stack(products, offer.price)
    return {
        "total_value": _as_float(stack.total_value),
        "main_value": _as_float(stack.main_value),
        "bonus_value": _as_float(stack.bonus_value),
        "value_multiplier": _as_float(stack.value_multiplier),
        "main_product_count": len(stack.main_products),
        "bonus_count": len(stack.bonuses),
    }


# --------------------------------- serializers ---------------------------------

class OfferCreateSerializer(serializers.ModelSerializer):
    """Create a bare offer. Status always starts as DRAFT."""

    id = serializers.IntegerField(read_only=True)
    tags = serializers.ListField(child=serializers.CharField(max_length=50), required=False)
    price = serializers.DecimalField(
        max_digits=10, decimal_places=2, min_value=Decimal("0"), required=False
    )

    class Meta:
        model = Offer
        fields = [
            "id",
            "name",
            "topic",
            "description",
            "tags",
            "price",
            "total_value",
            "status",
            "launch_date",
            "template",
            "theme_name",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["total_value", "status", "template", "theme_name", "created_at", "updated_at"]
        extra_kwargs = {
            "topic": {"required": False, "allow_null": True, "allow_blank": True},
            "description": {"required": False, "allow_null": True, "allow_blank": True},
            "launch_date": {"required": False, "allow_null": True},
        }

    def create(self, validated_data):
        return Offer.objects.create(status=Offer.Status.DRAFT, **validated_data)


class OfferListSerializer(serializers.ModelSerializer):
    """List serializer with computed fields.

    Expects the queryset to be annotated with `_product_count`,
    `_total_tasks` and `_completed_tasks`.
    """

    value_multiplier = serializers.SerializerMethodField()
    product_count = serializers.SerializerMethodField()
    progress_percentage = serializers.SerializerMethodField()

    class Meta:
        model = Offer
        fields = [
            "id",
            "name",
            "topic",
            "description",
            "tags",
            "price",
            "total_value",
            "value_multiplier",
            "status",
            "launch_date",
            "product_count",
            "progress_percentage",
            "created_at",
            "updated_at",
        ]

    def get_value_multiplier(self, obj):
        return _as_float(value_multiplier(obj.total_value, obj.price))

    def get_product_count(self, obj):
        return _annotated(obj, "_product_count")

    def get_progress_percentage(self, obj):
        return percentage(_annotated(obj, "_completed_tasks"), _annotated(obj, "_total_tasks"))


class OfferDetailViewSerializer(serializers.ModelSerializer):
    """Full offer: nested problems and products plus value stack and progress."""

    problems = ProblemSerializer(many=True, read_only=True)
    products = serializers.SerializerMethodField()
    value_stack = serializers.SerializerMethodField()
    progress = serializers.SerializerMethodField()

    class Meta:
        model = Offer
        fields = [
            "id",
            "name",
            "topic",
            "description",
            "tags",
            "price",
            "total_value",
            "status",
            "launch_date",
            "template",
            "theme_name",
            "problems",
            "products",
            "value_stack",
            "progress",
            "created_at",
            "updated_at",
        ]

    def _products(self, obj):
        return sorted(obj.products.all(), key=lambda p: (p.order, p.id))

    def get_products(self, obj):
        return ProductSerializer(self._products(obj), many=True).data

    def get_value_stack(self, obj):
        return value_stack_payload(obj, self._products(obj))

    def get_progress(self, obj):
        return offer_progress(self._products(obj)).as_dict()


class OfferPatchSerializer(serializers.ModelSerializer):
    """PATCH serializer for offers.

    - total_value is derived and cannot be written.
    - status may change freely except out of LAUNCHED.
    """

    tags = serializers.ListField(child=serializers.CharField(max_length=50), required=False)
    price = serializers.DecimalField(
        max_digits=10, decimal_places=2, min_value=Decimal("0"), required=False
    )

    class Meta:
        model = Offer
        fields = ["name", "topic", "description", "tags", "price", "status", "launch_date"]
        extra_kwargs = {
            "name": {"required": False},
            "topic": {"required": False, "allow_null": True, "allow_blank": True},
            "description": {"required": False, "allow_null": True, "allow_blank": True},
            "launch_date": {"required": False, "allow_null": True},
        }

    def validate_status(self, value):
        current = self.instance.status if self.instance is not None else Offer.Status.DRAFT
        if not can_transition(current, value):
            raise serializers.ValidationError(f"Cannot change status of a {current} offer.")
        return value


# ------------------------------ creation wizard --------------------------------

class WizardProblemSerializer(serializers.Serializer):
    """Problem as drafted in the wizard; `id` is a client-side reference."""

    id = serializers.CharField(max_length=100, required=False, allow_blank=True)
    title = serializers.CharField(max_length=255)
    description = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    emotional_hook = serializers.CharField(max_length=255, required=False, allow_null=True, allow_blank=True)


class WizardProductSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=200)
    description = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    value = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal("0"))
    delivery_format = serializers.CharField(max_length=100, required=False, allow_null=True, allow_blank=True)
    solution = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    is_bonus = serializers.BooleanField(required=False, default=False)
    problem_id = serializers.CharField(max_length=100, required=False, allow_null=True, allow_blank=True)

    def validate_problem_id(self, value):
        return value or None


class FullOfferSerializer(serializers.Serializer):
    """Wizard submit: offer fields with drafted problems and selected products."""

    name = serializers.CharField(max_length=200)
    topic = serializers.CharField(max_length=200, required=False, allow_null=True, allow_blank=True)
    description = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    tags = serializers.ListField(child=serializers.CharField(max_length=50), required=False, default=list)
    price = serializers.DecimalField(
        max_digits=10, decimal_places=2, min_value=Decimal("0"), required=False, default=Decimal("0")
    )
    launch_date = serializers.DateField(required=False, allow_null=True)
    problems = WizardProblemSerializer(many=True, required=False, default=list)
    products = WizardProductSerializer(many=True, required=False, default=list)

    def validate_problems(self, value):
        ids = [p["id"] for p in value if p.get("id")]
        if len(set(ids)) != len(ids):
            raise serializers.ValidationError("Problem ids must be unique.")
        return value


# -------------------------------- customization --------------------------------

def _color_field(**kwargs):
    return serializers.CharField(max_length=32, **kwargs)


class ColorPaletteSerializer(serializers.Serializer):
    primary = _color_field()
    secondary = _color_field()
    accent = _color_field()
    text = _color_field()
    background = _color_field()
    border = _color_field()


class ColorOverridesSerializer(serializers.Serializer):
    primary = _color_field(required=False, allow_null=True)
    secondary = _color_field(required=False, allow_null=True)
    accent = _color_field(required=False, allow_null=True)
    text = _color_field(required=False, allow_null=True)
    background = _color_field(required=False, allow_null=True)
    border = _color_field(required=False, allow_null=True)


class CustomTextSerializer(serializers.Serializer):
    header_text = serializers.CharField(max_length=255, required=False, allow_null=True, allow_blank=True)
    total_value_label = serializers.CharField(max_length=100, required=False, allow_null=True, allow_blank=True)
    price_label = serializers.CharField(max_length=100, required=False, allow_null=True, allow_blank=True)
    button_text = serializers.CharField(max_length=100, required=False, allow_null=True, allow_blank=True)
    bonus_badge = serializers.CharField(max_length=50, required=False, allow_null=True, allow_blank=True)
    value_label = serializers.CharField(max_length=50, required=False, allow_null=True, allow_blank=True)


class CustomizationInputSerializer(serializers.Serializer):
    """Editor state for the stack slide.

    Either `color_theme` (full palette) or `theme_name` (registry key) must be
    given; `custom_colors` are laid over the palette, missing `custom_text`
    fields use the default copy.
    """

    template = serializers.ChoiceField(choices=Offer.Template.choices)
    theme_name = serializers.ChoiceField(choices=list(COLOR_THEMES.keys()), required=False)
    color_theme = ColorPaletteSerializer(required=False)
    custom_colors = ColorOverridesSerializer(required=False, allow_null=True)
    custom_text = CustomTextSerializer(required=False)

    def validate(self, attrs):
        if "color_theme" not in attrs and "theme_name" not in attrs:
            raise serializers.ValidationError({"color_theme": "Provide color_theme or theme_name."})
        return attrs

    def to_customization(self):
        data = self.validated_data
        palette = data.get("color_theme")
        if palette is None:
            theme = COLOR_THEMES[data["theme_name"]]
            palette = {f: getattr(theme, f) for f in COLOR_FIELDS}
        text = {f: v for f, v in (data.get("custom_text") or {}).items() if f in TEXT_FIELDS}
        return build_customization(
            template=data["template"],
            color_theme=palette,
            custom_colors=data.get("custom_colors"),
            custom_text=text,
        )
