"""
Prometheus metrics definitions for the upload relay.
All metrics are registered here and can be imported by other modules.
"""
from prometheus_client import Counter, Histogram

# HTTP request metrics
http_requests_total = Counter(
    'http_requests_total',
    'Total HTTP requests',
    ['method', 'path', 'status']
)

http_request_duration_seconds = Histogram(
    'http_request_duration_seconds',
    'HTTP request duration in seconds',
    ['method', 'path'],
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0]
)

# Error metrics
errors_total = Counter(
    'errors_total',
    'Total errors',
    ['error_type']
)

# Upload metrics
uploads_total = Counter(
    'uploads_total',
    'Total upload requests by outcome',
    ['outcome']
)

upload_size_bytes = Histogram(
    'upload_size_bytes',
    'Size of files stored in the bucket',
    buckets=[1024, 16384, 131072, 1048576, 4194304, 10485760, 52428800]
)

storage_latency_seconds = Histogram(
    'storage_latency_seconds',
    'Object store write latency in seconds',
    ['status'],
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0, 60.0]
)
