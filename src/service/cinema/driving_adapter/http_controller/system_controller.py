from datetime import datetime, timezone
import time

from fastapi import APIRouter, Depends, Request, status

from src.platform.config.core_setting import settings
from src.service.cinema.app.query.check_database_use_case import CheckDatabaseUseCase
from src.service.cinema.driving_adapter.schema.envelope_schema import ApiResponse
from src.service.cinema.driving_adapter.schema.system_schema import (
    DatabaseStatusResponse,
    HealthResponse,
)


router = APIRouter()


@router.get('/health', status_code=status.HTTP_200_OK)
async def health_check(request: Request) -> HealthResponse:
    """Liveness probe; does not touch the database."""
    started_at = getattr(request.app.state, 'started_at', time.monotonic())
    return HealthResponse(
        message=f'{settings.PROJECT_NAME} is healthy',
        version=settings.VERSION,
        uptime=round(time.monotonic() - started_at, 3),
        timestamp=datetime.now(timezone.utc),
    )


@router.get('/test-db', status_code=status.HTTP_200_OK)
async def test_database(
    use_case: CheckDatabaseUseCase = Depends(CheckDatabaseUseCase.depends),
) -> ApiResponse[DatabaseStatusResponse]:
    db_status = await use_case.check()
    return ApiResponse[DatabaseStatusResponse](
        message='Database connection OK',
        data=DatabaseStatusResponse(
            connected=db_status.connected, movie_count=db_status.movie_count
        ),
    )
