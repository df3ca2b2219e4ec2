"""Problems API serializers."""

from rest_framework import serializers

from ..models import Problem


class ProblemSerializer(serializers.ModelSerializer):
    """Problem with the ids of the products that address it."""

    product_ids = serializers.SerializerMethodField()

    class Meta:
        model = Problem
        fields = [
            "id",
            "offer",
            "title",
            "description",
            "emotional_hook",
            "product_ids",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["offer", "created_at", "updated_at"]

    def get_product_ids(self, obj):
        return sorted(p.id for p in obj.products.all())


class ProblemPatchSerializer(serializers.ModelSerializer):
    """Partial update of a problem's texts; the owning offer cannot change."""

    class Meta:
        model = Problem
        fields = ["title", "description", "emotional_hook"]
        extra_kwargs = {
            "description": {"required": False, "allow_null": True, "allow_blank": True},
            "emotional_hook": {"required": False, "allow_null": True, "allow_blank": True},
        }
