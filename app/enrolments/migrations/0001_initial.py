from decimal import Decimal

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Course",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, help_text="Timestamp when this record was created")),
                ("updated_at", models.DateTimeField(auto_now=True, help_text="Timestamp when this record was last modified")),
                ("full_name", models.CharField(max_length=254)),
                ("short_name", models.CharField(max_length=255, unique=True)),
                ("visible", models.BooleanField(default=True)),
            ],
            options={
                "verbose_name": "Course",
                "verbose_name_plural": "Courses",
                "ordering": ["id"],
            },
        ),
        migrations.CreateModel(
            name="EnrolmentInstance",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, help_text="Timestamp when this record was created")),
                ("updated_at", models.DateTimeField(auto_now=True, help_text="Timestamp when this record was last modified")),
                ("enrol", models.CharField(db_index=True, help_text="Enrolment method name (e.g. 'ipaymu')", max_length=20)),
                ("name", models.CharField(blank=True, default="", max_length=255)),
                ("status", models.PositiveSmallIntegerField(choices=[(0, "Enabled"), (1, "Disabled")], default=0)),
                ("role", models.CharField(choices=[("manager", "Manager"), ("editingteacher", "Teacher"), ("teacher", "Non-editing teacher"), ("student", "Student")], default="student", max_length=20)),
                ("enrol_period", models.PositiveIntegerField(default=0, help_text="Enrolment duration in seconds (0 = unlimited)")),
                ("cost", models.DecimalField(decimal_places=2, default=Decimal("0"), max_digits=12)),
                ("currency", models.CharField(default="IDR", max_length=3)),
                ("course", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="enrolment_instances", to="enrolments.course")),
            ],
            options={
                "verbose_name": "Enrolment Instance",
                "verbose_name_plural": "Enrolment Instances",
                "ordering": ["id"],
                "indexes": [models.Index(fields=["course", "enrol", "status"], name="enrol_inst_course_method_idx")],
            },
        ),
        migrations.CreateModel(
            name="UserEnrolment",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, help_text="Timestamp when this record was created")),
                ("updated_at", models.DateTimeField(auto_now=True, help_text="Timestamp when this record was last modified")),
                ("role", models.CharField(choices=[("manager", "Manager"), ("editingteacher", "Teacher"), ("teacher", "Non-editing teacher"), ("student", "Student")], default="student", max_length=20)),
                ("time_start", models.PositiveBigIntegerField(default=0)),
                ("time_end", models.PositiveBigIntegerField(default=0)),
                ("instance", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="user_enrolments", to="enrolments.enrolmentinstance")),
                ("user", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="course_enrolments", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "verbose_name": "User Enrolment",
                "verbose_name_plural": "User Enrolments",
                "ordering": ["id"],
                "constraints": [models.UniqueConstraint(fields=("instance", "user"), name="unique_user_enrolment_per_instance")],
            },
        ),
    ]
