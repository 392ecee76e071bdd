import logging

from prometheus_client import Counter

log = logging.getLogger(__name__)


__all__ = [
    "Counter",
    "COMPARISON_COUNTER",
    "GITHUB_API_CALL_COUNTER",
    "inc_counter",
]


COMPARISON_COUNTER = Counter(
    "coverage_diff_comparisons",
    "Number of coverage snapshot comparisons, by whether any file changed",
    ["outcome"],
)

GITHUB_API_CALL_COUNTER = Counter(
    "coverage_diff_github_api_calls",
    "Number of times github was called on this endpoint",
    ["endpoint"],
)


def inc_counter(counter: Counter, labels: dict | None = None) -> None:
    try:
        if labels:
            counter.labels(**labels).inc()
        else:
            counter.inc()
    except Exception as e:
        log.warning(f"Error incrementing counter {counter._name}: {e}")
