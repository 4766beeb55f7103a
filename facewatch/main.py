# Standard library imports
from pathlib import Path
from contextlib import asynccontextmanager
import logging

# External package imports
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Local application imports
from .api.v1 import camera_router, face_recognition_router
from .application.services.face_recognition_service import FaceRecognitionService
from .core.config import get_settings
from .di.container import get_container
from .infrastructure.http_client_factory import close_shared_http_client

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup/shutdown events.

    Loads face models and the gallery on startup; stops every camera
    monitor and closes the shared HTTP client on shutdown.
    """
    service = get_container().get(FaceRecognitionService)

    # Startup: a missing model or unreadable gallery must not prevent the API from serving
    try:
        status = await service.initialize()
        logger.info(f"Face recognition ready: {status['models']['capability']}")
    except Exception as e:
        logger.error(f"Failed to initialize face recognition: {e}", exc_info=True)

    yield

    # Shutdown: stop monitors, then release HTTP connections
    try:
        await service.shutdown()
    except Exception as e:
        logger.error(f"Error stopping face recognition service: {e}", exc_info=True)

    await close_shared_http_client()
    logger.info("Application shutdown complete")


def create_application() -> FastAPI:
    """
    Create and configure FastAPI application.

    This function sets up the FastAPI application with:
    - Environment variable loading
    - Logging configuration
    - CORS middleware configuration
    - API route registration

    Returns:
        Configured FastAPI application instance
    """
    # Load environment variables from .env file
    env_path = Path(__file__).resolve().parent.parent / ".env"
    load_dotenv(env_path)

    settings = get_settings()
    configure_logging(settings.log_level)

    # Create FastAPI app
    application = FastAPI(
        title="FaceWatch API",
        version="1.0.0",
        description="Face recognition backend for the video surveillance dashboard",
        lifespan=lifespan
    )

    # Add CORS middleware
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register API routers
    application.include_router(face_recognition_router, prefix="/api/face-recognition")
    application.include_router(camera_router, prefix="/api")

    return application


# Create application instance
app = create_application()
