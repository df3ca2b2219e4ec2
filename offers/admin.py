from django.contrib import admin
from django.db.models import Count

from problems.models import Problem
from products.models import Product
from .models import Offer
from .value_stack import value_multiplier


class ProblemInline(admin.TabularInline):
    """
    Zeigt die Probleme direkt im Offer-Form an (Inline-Editing).
    """
    model = Problem
    extra = 0
    fields = ("title", "description", "emotional_hook")
    show_change_link = True


class ProductInline(admin.TabularInline):
    """
    Produkte des Offers in Stack-Reihenfolge. total_value wird beim Speichern
    über den Service neu berechnet, daher hier nur lesend.
    """
    model = Product
    fk_name = "offer"
    extra = 0
    fields = ("order", "name", "value", "is_bonus", "delivery_format", "problem")
    readonly_fields = ("order", "name", "value", "is_bonus", "delivery_format", "problem")
    ordering = ("order", "id")
    show_change_link = True
    can_delete = False

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Offer)
class OfferAdmin(admin.ModelAdmin):
    """
    Verwaltung von Offers:
    - Inline-Ansicht der Probleme und Produkte
    - Such-/Filterfelder
    - Value-Multiplier und Produktanzahl als Spalten
    """
    inlines = [ProblemInline, ProductInline]

    list_display = (
        "id",
        "name",
        "status",
        "price",
        "total_value",
        "value_multiplier_display",
        "product_count_display",
        "updated_at",
    )
    search_fields = ("name", "topic", "description")
    list_filter = ("status", "template", "theme_name")
    date_hierarchy = "created_at"
    ordering = ("-updated_at", "-id")
    readonly_fields = ("total_value", "created_at", "updated_at", "value_multiplier_display")

    def get_queryset(self, request):
        # Produktanzahl direkt in der Liste berechnen (keine N+1)
        qs = super().get_queryset(request)
        return qs.annotate(_product_count=Count("products", distinct=True))

    def value_multiplier_display(self, obj):
        return f"{value_multiplier(obj.total_value, obj.price)}x"
    value_multiplier_display.short_description = "value multiplier"

    def product_count_display(self, obj):
        v = getattr(obj, "_product_count", None)
        return v if v is not None else obj.products.count()
    product_count_display.short_description = "products"
