"""Métricas Prometheus del despacho de integraciones."""

from prometheus_client import Counter, Histogram


DISPATCH_COUNTER = Counter(
    "carrier_dispatch_total",
    "Resultados del pipeline resolver/verificar/invocar por transportadora.",
    ["carrier", "action", "outcome"],
)

DISPATCH_LATENCY = Histogram(
    "carrier_dispatch_latency_seconds",
    "Duración de la invocación de acciones de integración.",
    ["carrier", "action"],
    buckets=(
        0.05,
        0.1,
        0.25,
        0.5,
        1.0,
        2.5,
        5.0,
        10.0,
        30.0,
    ),
)

TRACKING_LOOKUPS = Counter(
    "carrier_tracking_lookups_total",
    "Consultas de rastreo por código, separadas por éxito o error.",
    ["carrier", "status"],
)


def record_dispatch(carrier: str, action: str, outcome: str) -> None:
    """Cuenta un resultado del pipeline (ok, not_found, unsupported, error)."""

    DISPATCH_COUNTER.labels(carrier=carrier, action=action, outcome=outcome).inc()


def observe_latency(carrier: str, action: str, elapsed: float) -> None:
    DISPATCH_LATENCY.labels(carrier=carrier, action=action).observe(elapsed)


def record_tracking_lookup(carrier: str, status: str) -> None:
    TRACKING_LOOKUPS.labels(carrier=carrier, status=status).inc()
