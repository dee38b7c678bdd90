"""Prometheus metrics for ownership checks and outbound calls."""

from prometheus_client import Counter

ownership_denials_total = Counter(
    "ownership_denials_total",
    "Lookups rejected by the ownership check",
    ["entity", "outcome"],
)

cebelca_requests_total = Counter(
    "cebelca_requests_total",
    "Outbound cebelca.biz company searches",
    ["outcome"],
)

grpc_requests_total = Counter(
    "grpc_requests_total",
    "Handled gRPC calls",
    ["method", "code"],
)
