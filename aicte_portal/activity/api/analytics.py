"""
Analytics metrics API controller (admin only).
"""

from django.http import HttpRequest
from ninja_extra import api_controller
from ninja_extra import http_get
from ninja_extra import http_post

from aicte_portal.activity.models import AnalyticsMetric
from aicte_portal.activity.schemas import AnalyticsMetricCreateSchema
from aicte_portal.activity.schemas import AnalyticsMetricResponseSchema
from aicte_portal.activity.schemas import AnalyticsMetricSchema
from aicte_portal.core.api import BaseAPI
from aicte_portal.core.api import IsAdmin
from aicte_portal.core.exceptions import ErrorSchema


@api_controller("/admin/analytics", tags=["Analytics (Admin)"], permissions=[IsAdmin])
class AnalyticsController(BaseAPI):

    @http_get(
        "/",
        response={200: list[AnalyticsMetricSchema], 401: ErrorSchema, 403: ErrorSchema},
        url_name="admin_analytics_list",
    )
    def list_metrics(self, request: HttpRequest, metric_type: str | None = None):
        """Recorded metrics, newest first, optionally of a single type."""
        metrics = AnalyticsMetric.objects.all()
        if metric_type:
            metrics = metrics.filter(metric_type=metric_type)
        return 200, list(metrics)

    @http_post(
        "/",
        response={201: AnalyticsMetricResponseSchema, 400: ErrorSchema, 401: ErrorSchema, 403: ErrorSchema},
        url_name="admin_analytics_create",
    )
    def create_metric(self, request: HttpRequest, data: AnalyticsMetricCreateSchema):
        metric = AnalyticsMetric.objects.create(**data.model_dump())
        return 201, {"metric": metric}
