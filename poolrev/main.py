"""Pool Revenue Engine FastAPI application."""

from fastapi import FastAPI

from poolrev.core.config import SERVICE_NAME
from poolrev.core.cors import setup_cors
from poolrev.core.logging_config import setup_logging
from poolrev.engine.live_data import LiveDataService
from poolrev.models.responses import HealthResponse
from poolrev.api.v1.routes import router as v1_router


def create_app(live_data: LiveDataService | None = None) -> FastAPI:
    """Build the application with its own live data collaborator."""
    setup_logging()

    app = FastAPI(
        title="Pool Revenue Engine",
        description="Bitcoin mining pool revenue and growth projection API",
        version="0.1.0",
    )
    app.state.live_data = live_data if live_data is not None else LiveDataService()

    # Setup CORS
    setup_cors(app)

    # Include v1 routes
    app.include_router(v1_router, prefix="/v1", tags=["v1"])

    @app.get("/health", response_model=HealthResponse, tags=["health"])
    def health_check() -> HealthResponse:
        """Health check endpoint."""
        return HealthResponse(status="ok", service=SERVICE_NAME)

    return app


app = create_app()
