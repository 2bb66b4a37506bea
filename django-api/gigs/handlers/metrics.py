"""Prometheus scrape endpoint for the booking engine's registry."""

from django.http import HttpRequest, HttpResponse
from django.views.decorators.http import require_GET
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from gigs.metrics import REGISTRY


@require_GET
def metrics_view(request: HttpRequest) -> HttpResponse:
    """Handler for GET /metrics"""
    return HttpResponse(generate_latest(REGISTRY), content_type=CONTENT_TYPE_LATEST)
