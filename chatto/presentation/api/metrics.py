"""
Prometheus scrape endpoint.

    observability/metrics.py  ──►  GET /metrics  ──►  Prometheus

Exposes the live connection gauge, per-kind delivery/drop counters and the
error counter. Unauthenticated; keep it off the public ingress.
"""

from fastapi import APIRouter, Response

from chatto.observability.metrics import get_metrics_content

router = APIRouter(prefix="/metrics", tags=["observability"])


@router.get("")
async def metrics():
    content, content_type = get_metrics_content()
    return Response(content=content, media_type=content_type)
