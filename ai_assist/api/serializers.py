"""Request serializers for the AI assistant endpoints."""

from rest_framework import serializers


class ProblemsRequestSerializer(serializers.Serializer):
    description = serializers.CharField()
    topic = serializers.CharField(required=False, allow_blank=True, default="")


class ProblemInputSerializer(serializers.Serializer):
    id = serializers.CharField(max_length=100)
    title = serializers.CharField(max_length=255)
    description = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    emotional_hook = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class ProductIdeasRequestSerializer(serializers.Serializer):
    description = serializers.CharField()
    problems = ProblemInputSerializer(many=True)

    def validate_problems(self, value):
        if not value:
            raise serializers.ValidationError("At least one problem is required.")
        return value


class ProductIdeaInputSerializer(serializers.Serializer):
    id = serializers.CharField(max_length=100)
    name = serializers.CharField(max_length=200)
    value = serializers.DecimalField(max_digits=10, decimal_places=2, required=False, default=0)


class SelectProductsRequestSerializer(serializers.Serializer):
    description = serializers.CharField(required=False, allow_blank=True, default="")
    product_ideas = ProductIdeaInputSerializer(many=True)

    def validate_product_ideas(self, value):
        if not value:
            raise serializers.ValidationError("At least one product idea is required.")
        return value


class SolutionsRequestSerializer(serializers.Serializer):
    problem = serializers.CharField()
    topic = serializers.CharField(required=False, allow_blank=True, default="")


class TasksRequestSerializer(serializers.Serializer):
    product_name = serializers.CharField(max_length=200)
    product_description = serializers.CharField(required=False, allow_blank=True, default="")


class NamesRequestSerializer(serializers.Serializer):
    current_name = serializers.CharField(max_length=200)
    context = serializers.CharField(required=False, allow_blank=True, default="")
