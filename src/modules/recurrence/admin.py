from django.contrib import admin

from modules.recurrence.models import RecurrenceProduct, Subscription


@admin.register(Subscription)
class SubscriptionAdmin(admin.ModelAdmin):
    list_display = ("gateway_id", "platform_order_code", "status", "created_at")
    list_filter = ("status", "payment_method")
    search_fields = ("gateway_id", "code", "platform_order_code")
    readonly_fields = ("raw_response",)


@admin.register(RecurrenceProduct)
class RecurrenceProductAdmin(admin.ModelAdmin):
    list_display = ("product_code", "cycles", "billing_type", "deleted_at")
    search_fields = ("product_code",)
