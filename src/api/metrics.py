from prometheus_client import Counter, Histogram, Gauge, REGISTRY


# we check if they are already registered to avoid errors during hot reloads or test runs
def get_or_create_metric(name, documentation, metric_type, **kwargs):
    try:
        # Try to create it
        return metric_type(name, documentation, **kwargs)
    except ValueError:
        # If it already exists, retrieve it from the registry
        return REGISTRY._names_to_collectors[name]


REQUESTS_TOTAL = get_or_create_metric(
    "diary_requests_total",
    "Total requests",
    Counter,
    labelnames=["endpoint", "status"],
)

REQUEST_LATENCY_SECONDS = get_or_create_metric(
    "diary_request_latency_seconds",
    "Request latency",
    Histogram,
    labelnames=["endpoint"],
)

TASKS_EXTRACTED_TOTAL = get_or_create_metric(
    "diary_tasks_extracted_total", "Total tasks extracted from diary text", Counter
)

FALLBACK_TASKS_TOTAL = get_or_create_metric(
    "diary_fallback_tasks_total",
    "Extractions that found no task line and produced a review task",
    Counter,
)

OCR_FAILURES_TOTAL = get_or_create_metric(
    "diary_ocr_failures_total", "Uploads whose OCR step failed", Counter
)

TASKS_STORED = get_or_create_metric(
    "diary_tasks_stored", "Tasks currently held in the session store", Gauge
)
