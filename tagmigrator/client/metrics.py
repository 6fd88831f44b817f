"""
Request metrics for server round trips.

Counts requests and errors per endpoint so a run can report how much
it talked to the server.
"""

from collections import Counter


class RequestMetrics:
    """
    In-process request counter for one client.

    Endpoint keys use the request template (e.g. ``GET /cis/tagging/tag/{id}``)
    rather than the concrete URL so per-object calls aggregate.
    """

    def __init__(self) -> None:
        self.requests: Counter[str] = Counter()
        self.errors: Counter[str] = Counter()
        self.duration: float = 0.0

    def record_request(
        self,
        method: str,
        path: str,
        status_code: int,
        duration: float,
    ) -> None:
        """Record a completed request."""
        key = f"{method} {path}"
        self.requests[key] += 1
        self.duration += duration
        if status_code >= 400:
            self.errors[key] += 1

    @property
    def total_requests(self) -> int:
        return sum(self.requests.values())

    @property
    def total_errors(self) -> int:
        return sum(self.errors.values())

    def summary(self) -> str:
        """One-line summary, busiest endpoint first."""
        text = f"{self.total_requests} requests ({self.total_errors} failed) in {self.duration:.2f}s"
        if self.requests:
            key, count = self.requests.most_common(1)[0]
            text += f"; busiest: {key} x{count}"
        return text
