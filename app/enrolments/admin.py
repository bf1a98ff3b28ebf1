"""
Enrolment admin configuration.

Registers courses, enrolment instances and user enrolments so site
administrators can configure the iPaymu method and inspect grants.
"""

from django.contrib import admin

from enrolments.models import Course, EnrolmentInstance, UserEnrolment


class EnrolmentInstanceInline(admin.TabularInline):
    """Inline enrolment methods on the course page."""

    model = EnrolmentInstance
    extra = 0
    fields = ["enrol", "name", "status", "role", "enrol_period", "cost", "currency"]


@admin.register(Course)
class CourseAdmin(admin.ModelAdmin):
    """Admin configuration for Course."""

    list_display = ["id", "short_name", "full_name", "visible", "created_at"]
    list_filter = ["visible"]
    search_fields = ["short_name", "full_name"]
    readonly_fields = ["created_at", "updated_at"]
    inlines = [EnrolmentInstanceInline]


@admin.register(EnrolmentInstance)
class EnrolmentInstanceAdmin(admin.ModelAdmin):
    """
    Admin configuration for EnrolmentInstance.

    The iPaymu callback only accepts enabled instances whose method is
    "ipaymu", so both fields are editable from the list view.
    """

    list_display = [
        "id",
        "course",
        "enrol",
        "status",
        "role",
        "enrol_period",
        "cost",
        "currency",
    ]
    list_editable = ["status"]
    list_filter = ["enrol", "status", "role"]
    search_fields = ["course__short_name", "name"]
    readonly_fields = ["created_at", "updated_at"]

    fieldsets = (
        (
            None,
            {
                "fields": ("course", "enrol", "name", "status"),
            },
        ),
        (
            "Enrolment",
            {
                "fields": ("role", "enrol_period"),
            },
        ),
        (
            "Pricing",
            {
                "fields": ("cost", "currency"),
            },
        ),
        (
            "Timestamps",
            {
                "fields": ("created_at", "updated_at"),
                "classes": ("collapse",),
            },
        ),
    )


@admin.register(UserEnrolment)
class UserEnrolmentAdmin(admin.ModelAdmin):
    """Admin configuration for UserEnrolment."""

    list_display = ["id", "user", "instance", "role", "time_start", "time_end"]
    list_filter = ["role", "instance__enrol"]
    search_fields = ["user__username", "user__email", "instance__course__short_name"]
    readonly_fields = ["created_at", "updated_at"]
    raw_id_fields = ["user", "instance"]
