"""gRPC server bootstrap - both services on one server."""

import asyncio
import logging

import grpc
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from backend.company_service.config import get_settings
from backend.company_service.db.engine import Database
from backend.company_service.grpc_app.services import CompanyServicer, ProductServicer
from backend.company_service.grpc_app.stubs import company_pb2_grpc, product_pb2_grpc
from backend.company_service.utils.logging import configure_logging

logger = logging.getLogger(__name__)


def create_grpc_server(session_factory: async_sessionmaker[AsyncSession]) -> grpc.aio.Server:
    """Create a server with CompanyService and ProductService registered."""
    server = grpc.aio.server()
    company_pb2_grpc.add_CompanyServiceServicer_to_server(CompanyServicer(session_factory), server)
    product_pb2_grpc.add_ProductServiceServicer_to_server(ProductServicer(session_factory), server)
    return server


async def start_grpc_server(
    session_factory: async_sessionmaker[AsyncSession],
    port: int = 50051,
    host: str = "0.0.0.0",
) -> tuple[grpc.aio.Server, int]:
    """Bind and start the gRPC server.

    Returns:
        (server, bound_port) - pass port 0 to bind an ephemeral port
    """
    server = create_grpc_server(session_factory)
    bound_port = server.add_insecure_port(f"{host}:{port}")
    await server.start()
    logger.info(f"Company & Product gRPC server running on port {bound_port}")
    return server, bound_port


async def serve_grpc() -> None:
    """Run only the gRPC server until terminated."""
    settings = get_settings()
    configure_logging(settings)

    database = Database.from_settings(settings)
    if settings.should_create_tables:
        await database.create_all()

    server, _ = await start_grpc_server(database.session_factory, settings.grpc_port)
    try:
        await server.wait_for_termination()
    finally:
        await server.stop(grace=5)
        await database.dispose()


if __name__ == "__main__":
    asyncio.run(serve_grpc())
