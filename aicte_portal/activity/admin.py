from django.contrib import admin

from .models import AnalyticsMetric
from .models import AuditLog
from .models import Notification


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ["id", "user", "type", "title", "is_read", "created"]
    list_filter = ["type", "is_read", "created"]
    search_fields = ["title", "message", "user__email"]
    readonly_fields = ["id", "created", "modified"]


@admin.register(AuditLog)
class AuditLogAdmin(admin.ModelAdmin):
    list_display = ["id", "action", "entity_type", "entity_id", "actor", "created"]
    list_filter = ["action", "entity_type", "created"]
    search_fields = ["action", "entity_id", "actor__email"]
    readonly_fields = ["id", "actor", "action", "entity_type", "entity_id", "details", "created", "modified"]


@admin.register(AnalyticsMetric)
class AnalyticsMetricAdmin(admin.ModelAdmin):
    list_display = ["id", "metric_type", "value", "created"]
    list_filter = ["metric_type", "created"]
    readonly_fields = ["id", "created", "modified"]
