"""
Payment admin configuration.

Registers payment records and the callback journal with the Django
admin. Callback events are a read-only audit trail used to reconcile
callbacks that failed partway.
"""

from django.contrib import admin

from payments.models import CallbackEvent, PaymentRecord

__all__ = [
    "CallbackEventAdmin",
    "PaymentRecordAdmin",
]


@admin.register(PaymentRecord)
class PaymentRecordAdmin(admin.ModelAdmin):
    """
    Admin configuration for PaymentRecord.

    Provides visibility into checkout attempts and their status.
    """

    list_display = [
        "id",
        "user",
        "course",
        "instance",
        "reference",
        "amount_display",
        "payment_status",
        "timestamp",
        "time_updated",
    ]
    list_filter = ["payment_status", "currency"]
    search_fields = ["reference", "user__username", "user__email", "course__short_name"]
    readonly_fields = ["created_at", "updated_at"]
    raw_id_fields = ["user", "course", "instance"]
    ordering = ["-timestamp"]

    fieldsets = (
        (
            None,
            {
                "fields": ("user", "course", "instance", "reference"),
            },
        ),
        (
            "Payment",
            {
                "fields": ("amount", "currency", "payment_status", "pending_reason"),
            },
        ),
        (
            "Timestamps",
            {
                "fields": ("timestamp", "time_updated", "created_at", "updated_at"),
            },
        ),
    )

    def amount_display(self, obj: PaymentRecord) -> str:
        """Display the amount with its currency."""
        return f"{obj.amount} {obj.currency}"

    amount_display.short_description = "Amount"


@admin.register(CallbackEvent)
class CallbackEventAdmin(admin.ModelAdmin):
    """
    Admin configuration for CallbackEvent.

    Callback events are immutable once received.
    """

    list_display = [
        "id",
        "merchant_order_id",
        "transaction_id",
        "status",
        "failed_step",
        "enrolment_applied",
        "error_code",
        "created_at",
    ]
    list_filter = ["status", "failed_step", "enrolment_applied", "created_at"]
    search_fields = ["id", "merchant_order_id", "transaction_id", "reference"]
    readonly_fields = [
        "id",
        "merchant_order_id",
        "reference",
        "transaction_id",
        "payload",
        "status",
        "failed_step",
        "enrolment_applied",
        "error_code",
        "error_message",
        "processed_at",
        "created_at",
        "updated_at",
    ]
    date_hierarchy = "created_at"
    ordering = ["-created_at"]

    fieldsets = (
        (
            None,
            {
                "fields": ("id", "merchant_order_id", "transaction_id", "reference", "status"),
            },
        ),
        (
            "Processing",
            {
                "fields": ("failed_step", "enrolment_applied", "processed_at"),
            },
        ),
        (
            "Error Info",
            {
                "fields": ("error_code", "error_message"),
                "classes": ("collapse",),
            },
        ),
        (
            "Payload",
            {
                "fields": ("payload",),
                "classes": ("collapse",),
            },
        ),
        (
            "Timestamps",
            {
                "fields": ("created_at", "updated_at"),
            },
        ),
    )

    def has_delete_permission(self, request, obj=None) -> bool:
        """Disable delete for callback events (audit trail)."""
        return False

    def has_add_permission(self, request) -> bool:
        """Disable adding callback events through admin."""
        return False
