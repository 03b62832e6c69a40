from prometheus_client import Counter, Histogram, generate_latest
from fastapi import Response

http_requests_total = Counter(
    'http_requests_total',
    'Total HTTP requests',
    ['method', 'endpoint', 'status']
)

http_request_duration_seconds = Histogram(
    'http_request_duration_seconds',
    'HTTP request duration in seconds',
    ['method', 'endpoint']
)

accounts_created_total = Counter('accounts_created_total', 'Total accounts created')

login_attempts_total = Counter(
    'login_attempts_total',
    'Login attempts by outcome',
    ['outcome']
)

# storage rejected an allocated id that another request persisted first
id_allocation_collisions_total = Counter(
    'id_allocation_collisions_total',
    'Allocated account ids rejected by the storage uniqueness constraint'
)

def metrics_endpoint():
    """Prometheus metrics endpoint"""
    return Response(content=generate_latest(), media_type="text/plain")
