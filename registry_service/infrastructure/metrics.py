from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST
from fastapi import Response

# Метрики для HTTP запросов
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

# Регистрации по варианту и исходу (created/conflict/error)
registrations_total = Counter(
    'registrations_total',
    'Registration attempts',
    ['variant', 'outcome']
)

# Метрики для БД
db_queries_total = Counter('db_queries_total', 'Total database queries', ['collection'])

def metrics_endpoint():
    """Endpoint для Prometheus метрик"""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
