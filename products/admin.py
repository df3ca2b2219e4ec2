from django import forms
from django.contrib import admin
from django.db import transaction

from offers.services import refresh_total_value
from tasks.models import Task
from .models import Product
from .services import compact_orders, next_order


class ProductAdminForm(forms.ModelForm):
    """
    Ein verknüpftes Problem muss zum selben Offer gehören wie das Produkt.
    """

    class Meta:
        model = Product
        fields = "__all__"

    def clean(self):
        cleaned = super().clean()
        offer, problem = cleaned.get("offer"), cleaned.get("problem")
        if offer is not None and problem is not None and problem.offer_id != offer.pk:
            self.add_error("problem", "Problem does not belong to this offer.")
        return cleaned


class TaskInline(admin.TabularInline):
    """
    Aufgaben des Produkts direkt im Produkt-Form.
    """
    model = Task
    extra = 0
    fields = ("title", "status", "priority", "due_date")
    show_change_link = True


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    """
    Verwaltung einzelner Produkte. Speichern und Löschen halten
    offer.total_value und die Reihenfolge in derselben Transaktion aktuell,
    auch für das bisherige Offer beim Verschieben.
    """
    form = ProductAdminForm
    inlines = [TaskInline]

    list_display = ("id", "name", "offer", "order", "value", "is_bonus", "is_added_to_inventory")
    list_select_related = ("offer",)
    search_fields = ("name", "description", "offer__name")
    list_filter = ("is_bonus", "is_added_to_inventory")
    ordering = ("offer", "order", "id")
    readonly_fields = ("order", "is_added_to_inventory", "inventory_product", "created_at", "updated_at")

    def save_model(self, request, obj, form, change):
        with transaction.atomic():
            previous_offer_id = None
            if change:
                previous_offer_id = (
                    Product.objects.filter(pk=obj.pk).values_list("offer_id", flat=True).first()
                )
            moved = previous_offer_id is not None and previous_offer_id != obj.offer_id
            if not change or moved:
                obj.order = next_order(obj.offer_id)
            super().save_model(request, obj, form, change)
            if moved:
                self._sync_offers([previous_offer_id])
            refresh_total_value(obj.offer_id)

    def delete_model(self, request, obj):
        offer_id = obj.offer_id
        with transaction.atomic():
            super().delete_model(request, obj)
            self._sync_offers([offer_id])

    def delete_queryset(self, request, queryset):
        # Sammel-Löschung aus der Changelist ("delete selected")
        with transaction.atomic():
            offer_ids = set(queryset.values_list("offer_id", flat=True))
            super().delete_queryset(request, queryset)
            self._sync_offers(sorted(offer_ids))

    @staticmethod
    def _sync_offers(offer_ids):
        for offer_id in offer_ids:
            compact_orders(offer_id)
            refresh_total_value(offer_id)
