from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from poolrev.core.config import get_cors_origins


def setup_cors(app: FastAPI) -> None:
    """Configure CORS middleware for the FastAPI app."""
    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_cors_origins(),
        allow_methods=["GET", "POST"],
        allow_headers=["Content-Type"],
        # Browsers need this to read the CSV export filename
        expose_headers=["Content-Disposition"],
    )
