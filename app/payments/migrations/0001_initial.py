import uuid
from decimal import Decimal

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("enrolments", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="CallbackEvent",
            fields=[
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, help_text="Timestamp when this record was created")),
                ("updated_at", models.DateTimeField(auto_now=True, help_text="Timestamp when this record was last modified")),
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, help_text="Unique identifier for this record", primary_key=True, serialize=False)),
                ("merchant_order_id", models.CharField(blank=True, db_index=True, default="", max_length=255)),
                ("reference", models.CharField(blank=True, default="", max_length=255)),
                ("transaction_id", models.CharField(blank=True, db_index=True, default="", max_length=255)),
                ("payload", models.JSONField(blank=True, default=dict)),
                ("status", models.CharField(choices=[("received", "Received"), ("processed", "Processed"), ("failed", "Failed")], db_index=True, default="received", max_length=20)),
                ("failed_step", models.CharField(blank=True, choices=[("parse", "Parse request"), ("verify", "Verify transaction"), ("resolve", "Resolve order"), ("enrol", "Enrol user"), ("record", "Update payment record"), ("notify", "Notify stakeholders")], default="", max_length=20)),
                ("enrolment_applied", models.BooleanField(default=False)),
                ("error_code", models.CharField(blank=True, default="", max_length=100)),
                ("error_message", models.TextField(blank=True, default="")),
                ("processed_at", models.DateTimeField(blank=True, null=True)),
            ],
            options={
                "verbose_name": "Callback Event",
                "verbose_name_plural": "Callback Events",
                "ordering": ["-created_at"],
                "indexes": [models.Index(fields=["status", "created_at"], name="cbevent_status_created_idx")],
            },
        ),
        migrations.CreateModel(
            name="PaymentRecord",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, help_text="Timestamp when this record was created")),
                ("updated_at", models.DateTimeField(auto_now=True, help_text="Timestamp when this record was last modified")),
                ("reference", models.CharField(blank=True, db_index=True, default="", help_text="iPaymu session id (sid) of the checkout", max_length=255)),
                ("amount", models.DecimalField(decimal_places=2, default=Decimal("0"), max_digits=12)),
                ("currency", models.CharField(default="IDR", max_length=3)),
                ("payment_status", models.CharField(choices=[("Pending", "Pending"), ("Success", "Success"), ("Failed", "Failed")], db_index=True, default="Pending", max_length=20)),
                ("pending_reason", models.CharField(blank=True, default="", max_length=255)),
                ("timestamp", models.PositiveBigIntegerField(default=0, help_text="Unix milliseconds when checkout created this record")),
                ("time_updated", models.PositiveBigIntegerField(default=0, help_text="Unix milliseconds of the latest status change")),
                ("course", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="payment_records", to="enrolments.course")),
                ("instance", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="payment_records", to="enrolments.enrolmentinstance")),
                ("user", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="payment_records", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "verbose_name": "Payment Record",
                "verbose_name_plural": "Payment Records",
                "ordering": ["-timestamp", "-id"],
                "indexes": [models.Index(fields=["user", "course", "instance", "reference", "-timestamp"], name="payrec_order_latest_idx")],
            },
        ),
    ]
