from prometheus_client import Counter, Histogram
from prometheus_fastapi_instrumentator import Instrumentator, metrics

PROMETHEUS_NAMESPACE = 'Azsum'
PROMETHEUS_SUMMARIES_SUBSYSTEM = 'Summaries'

SUMMARY_INPUT_LENGTH_METRIC = Histogram(
    'summary_input_length',
    documentation='Measures the length of the input text',
    namespace=PROMETHEUS_NAMESPACE,
    subsystem=PROMETHEUS_SUMMARIES_SUBSYSTEM,
    buckets=[50, 100, 500, 1000, 2000, 5000, 10000],
)

SUMMARY_DURATION_METRIC = Histogram(
    'summary_duration_seconds',
    documentation='Measures the duration of a summary, from submission until the job is done, in seconds',
    namespace=PROMETHEUS_NAMESPACE,
    subsystem=PROMETHEUS_SUMMARIES_SUBSYSTEM,
    buckets=[2**n for n in range(8)],
)

SUMMARY_POLL_ATTEMPTS_METRIC = Histogram(
    'summary_poll_attempts',
    documentation='Number of status queries needed until a job reached a terminal status',
    namespace=PROMETHEUS_NAMESPACE,
    subsystem=PROMETHEUS_SUMMARIES_SUBSYSTEM,
    buckets=[1, 2, 3, 5, 10, 20, 50, 100],
)

SUMMARY_ERROR_COUNTER = Counter(
    'summary_errors',
    documentation='Number of summaries that have failed',
    namespace=PROMETHEUS_NAMESPACE,
    subsystem=PROMETHEUS_SUMMARIES_SUBSYSTEM,
    labelnames=['kind'],
)

instrumentator = Instrumentator(
    excluded_handlers=['/healthz', '/metrics'],
)

instrumentator.add(
    metrics.latency(buckets=[2**n for n in range(8)]),
    metrics.requests(metric_namespace=PROMETHEUS_NAMESPACE, metric_subsystem=PROMETHEUS_SUMMARIES_SUBSYSTEM),
)
