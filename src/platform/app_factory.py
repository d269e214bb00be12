"""
Shared FastAPI App Factory

Provides common app setup for production and test environments.
"""

from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from datetime import datetime, timezone
import time
from typing import Any

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse, PlainTextResponse, RedirectResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from src.platform.config.core_setting import settings
from src.platform.exception.exception_handlers import register_exception_handlers
from src.platform.observability.tracing import TracingConfig
from src.service.cinema.driving_adapter.http_controller.booking_controller import (
    router as booking_router,
)
from src.service.cinema.driving_adapter.http_controller.movie_controller import (
    router as movie_router,
)
from src.service.cinema.driving_adapter.http_controller.seat_controller import (
    router as seat_router,
)
from src.service.cinema.driving_adapter.http_controller.showtime_controller import (
    router as showtime_router,
)
from src.service.cinema.driving_adapter.http_controller.system_controller import (
    router as system_router,
)


API_PREFIX = '/api'

API_ENDPOINTS = {
    'health': f'GET {API_PREFIX}/health',
    'testDb': f'GET {API_PREFIX}/test-db',
    'movies': f'GET {API_PREFIX}/movies',
    'movie': f'GET {API_PREFIX}/movies/:id',
    'movieShowtimes': f'GET {API_PREFIX}/movies/:id/showtimes',
    'showtimes': f'GET {API_PREFIX}/showtimes',
    'seats': f'GET {API_PREFIX}/seats',
    'showtimeSeats': f'GET {API_PREFIX}/showtimes/:id/seats',
    'bookings': f'POST {API_PREFIX}/bookings',
}


def create_app(
    *,
    lifespan: Callable[[FastAPI], AbstractAsyncContextManager[Any]],
    title_suffix: str = '',
    description: str = 'Movie ticket booking API',
    service_name: str = settings.SERVICE_NAME,
) -> FastAPI:
    """
    Create a configured FastAPI application.

    Args:
        lifespan: Async context manager for app lifespan (startup/shutdown)
        title_suffix: Optional suffix for app title (e.g., " (Test)")
        description: App description
        service_name: Service name for tracing
    """
    app = FastAPI(
        title=f'{settings.PROJECT_NAME}{title_suffix}',
        description=description,
        version=settings.VERSION,
        lifespan=lifespan,
        default_response_class=ORJSONResponse,
    )
    app.state.started_at = time.monotonic()

    # Auto-instrument FastAPI (must be done before mounting routes)
    TracingConfig(service_name=service_name).instrument_fastapi(app=app)

    app.add_middleware(
        CORSMiddleware,  # type: ignore
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=['*'],
        allow_headers=['*'],
    )

    register_exception_handlers(app)

    api = APIRouter(prefix=API_PREFIX)
    api.include_router(system_router, tags=['system'])
    api.include_router(movie_router, prefix='/movies', tags=['movie'])
    api.include_router(showtime_router, prefix='/showtimes', tags=['showtime'])
    api.include_router(seat_router, prefix='/seats', tags=['seat'])
    api.include_router(booking_router, prefix='/bookings', tags=['booking'])
    app.include_router(api)

    _register_common_endpoints(app)

    return app


def _register_common_endpoints(app: FastAPI) -> None:
    @app.get('/', include_in_schema=False)
    async def root() -> RedirectResponse:
        return RedirectResponse(url='/docs')

    @app.get(API_PREFIX, tags=['system'])
    async def api_info() -> dict[str, Any]:
        return {
            'success': True,
            'message': f'{settings.PROJECT_NAME} is running',
            'version': settings.VERSION,
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'endpoints': API_ENDPOINTS,
        }

    @app.get('/metrics', include_in_schema=False)
    async def get_metrics() -> PlainTextResponse:
        """Prometheus metrics endpoint."""
        return PlainTextResponse(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
