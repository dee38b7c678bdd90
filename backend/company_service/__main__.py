"""Run the company service: ``python -m backend.company_service``."""

import uvicorn

from backend.company_service.config import get_settings

if __name__ == "__main__":
    settings = get_settings()
    uvicorn.run(
        "backend.company_service.main:app",
        host="0.0.0.0",
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
