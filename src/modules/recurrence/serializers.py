"""Subscription DRF serializers for API output."""

from __future__ import annotations

from rest_framework import serializers

from modules.recurrence.models import Subscription


class SubscriptionSerializer(serializers.ModelSerializer):
    class Meta:
        model = Subscription
        fields = [
            "id",
            "gateway_id",
            "code",
            "platform_order_code",
            "status",
            "interval_type",
            "interval_count",
            "billing_type",
            "payment_method",
            "installments",
            "description",
            "gateway_created_at",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class CancellationResultSerializer(serializers.Serializer):
    message = serializers.CharField()
    code = serializers.IntegerField()
