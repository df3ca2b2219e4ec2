from django.contrib import admin
from django.db.models import Count

from .models import InventoryProduct


@admin.register(InventoryProduct)
class InventoryProductAdmin(admin.ModelAdmin):
    """
    Wiederverwendbare Produkte inkl. Anzahl verknüpfter Offer-Produkte.
    """
    list_display = ("id", "name", "value", "delivery_format", "linked_count_display", "updated_at")
    search_fields = ("name", "description", "solution")
    ordering = ("-created_at", "-id")
    readonly_fields = ("created_at", "updated_at")

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.annotate(_linked=Count("products", distinct=True))

    def linked_count_display(self, obj):
        v = getattr(obj, "_linked", None)
        return v if v is not None else obj.products.count()
    linked_count_display.short_description = "linked products"

    def delete_model(self, request, obj):
        # Flags der Quellprodukte zurücksetzen, wie beim API-Delete
        obj.products.update(is_added_to_inventory=False)
        super().delete_model(request, obj)
