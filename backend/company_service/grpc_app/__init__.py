"""gRPC transport layer for the application.

This package hosts:
- Protocol buffers (in `protos/`), compiled at import time with
  `grpc.protos_and_services` (requires grpcio-tools).
- Server bootstrap.
- Thin servicers that map gRPC requests to store lookups.

The servicers are read-only and intentionally NOT scoped by owner: the RPC
surface is meant for trusted service-to-service callers only.
"""
