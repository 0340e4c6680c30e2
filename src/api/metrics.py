from prometheus_client import Counter, Histogram, REGISTRY


# we check if they are already registered to avoid errors during hot reloads or test runs
def get_or_create_metric(name, documentation, metric_type, **kwargs):
    try:
        return metric_type(name, documentation, **kwargs)
    except ValueError:
        # already registered, hand back the existing collector
        return REGISTRY._names_to_collectors[name]


REQUESTS_TOTAL = get_or_create_metric(
    "tasknotes_nlp_requests_total",
    "Total NLP requests",
    Counter,
    labelnames=["endpoint", "status"],
)

REQUEST_LATENCY_SECONDS = get_or_create_metric(
    "tasknotes_nlp_request_latency_seconds",
    "NLP request latency",
    Histogram,
    labelnames=["endpoint"],
)

FIELDS_EXTRACTED_TOTAL = get_or_create_metric(
    "tasknotes_nlp_fields_extracted_total",
    "Parsed task fields populated, by field",
    Counter,
    labelnames=["field"],
)
