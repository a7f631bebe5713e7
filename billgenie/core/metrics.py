"""In-process request metrics exposed in Prometheus text format."""

import logging
import time
from collections import defaultdict, deque
from typing import Deque, Dict, List

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

logger = logging.getLogger(__name__)

# Durations kept per route for the summary quantiles
DURATION_WINDOW = 1000


class MetricsCollector:
    """Counts requests per route and status and keeps recent durations."""

    def __init__(self):
        self.reset()

    def reset(self) -> None:
        self.request_count: Dict[tuple, int] = defaultdict(int)
        self.status_count: Dict[int, int] = defaultdict(int)
        self.request_duration: Dict[tuple, Deque[float]] = defaultdict(
            lambda: deque(maxlen=DURATION_WINDOW)
        )
        self.active_requests = 0

    @staticmethod
    def route_label(path: str) -> str:
        """Collapse numeric path segments so ids do not become labels."""
        return "/".join(":id" if part.isdigit() else part for part in path.split("/"))

    def record(self, method: str, path: str, status: int, duration: float) -> None:
        key = (method, self.route_label(path))
        self.request_count[key] += 1
        self.request_duration[key].append(duration)
        self.status_count[status] += 1

    def render(self) -> str:
        lines: List[str] = [
            "# HELP billgenie_http_requests_total Total HTTP requests",
            "# TYPE billgenie_http_requests_total counter",
        ]
        for (method, path), count in sorted(self.request_count.items()):
            lines.append(f'billgenie_http_requests_total{{method="{method}",path="{path}"}} {count}')

        lines.append("# HELP billgenie_http_responses_total HTTP responses by status code")
        lines.append("# TYPE billgenie_http_responses_total counter")
        for code, count in sorted(self.status_count.items()):
            lines.append(f'billgenie_http_responses_total{{status="{code}"}} {count}')

        lines.append("# HELP billgenie_http_active_requests Requests currently in flight")
        lines.append("# TYPE billgenie_http_active_requests gauge")
        lines.append(f"billgenie_http_active_requests {self.active_requests}")

        lines.append("# HELP billgenie_http_request_duration_seconds Request duration")
        lines.append("# TYPE billgenie_http_request_duration_seconds summary")
        for (method, path), durations in sorted(self.request_duration.items()):
            if not durations:
                continue
            ordered = sorted(durations)
            median = ordered[len(ordered) // 2]
            p99 = ordered[min(len(ordered) - 1, int(len(ordered) * 0.99))]
            labels = f'method="{method}",path="{path}"'
            lines.append(f'billgenie_http_request_duration_seconds{{{labels},quantile="0.5"}} {median:.4f}')
            lines.append(f'billgenie_http_request_duration_seconds{{{labels},quantile="0.99"}} {p99:.4f}')
            lines.append(f"billgenie_http_request_duration_seconds_sum{{{labels}}} {sum(ordered):.4f}")
            lines.append(f"billgenie_http_request_duration_seconds_count{{{labels}}} {len(ordered)}")

        return "\n".join(lines) + "\n"


metrics = MetricsCollector()


class MetricsMiddleware(BaseHTTPMiddleware):
    """Records every request except scrapes of ``/metrics`` itself."""

    async def dispatch(self, request: Request, call_next):
        if request.url.path == "/metrics":
            return await call_next(request)

        metrics.active_requests += 1
        start = time.perf_counter()
        status = 500
        try:
            response = await call_next(request)
            status = response.status_code
            return response
        finally:
            metrics.active_requests -= 1
            metrics.record(request.method, request.url.path, status, time.perf_counter() - start)
