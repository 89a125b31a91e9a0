"""Main entry point for running the FastAPI application."""
import uvicorn

from pirelay.api import app
from pirelay.config import settings

if __name__ == "__main__":
    print(f"Starting {settings.app_name} v{settings.version}")
    print(f"Environment: {settings.environment.value}")
    print(f"Email database: {settings.email_table_path}")
    print(f"Auto-reload: {'Enabled' if settings.debug else 'Disabled'}")
    print("-" * 50)

    uvicorn.run(
        "pirelay.api:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        reload_dirs=["pirelay"] if settings.debug else None,
        log_level=settings.logging.level.lower(),
    )
