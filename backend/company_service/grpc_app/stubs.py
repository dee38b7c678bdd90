"""Runtime-compiled protobuf messages and service stubs.

Proto paths are resolved against ``sys.path``, so the project root must be
importable (it is when running from the repository root or after
``pip install -e .``).
"""

import grpc

PROTO_DIR = "backend/company_service/grpc_app/protos"

company_pb2, company_pb2_grpc = grpc.protos_and_services(f"{PROTO_DIR}/company.proto")
product_pb2, product_pb2_grpc = grpc.protos_and_services(f"{PROTO_DIR}/product.proto")
