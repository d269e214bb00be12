from datetime import datetime

from pydantic import BaseModel


class HealthResponse(BaseModel):
    success: bool = True
    message: str
    version: str
    uptime: float  # seconds since app start
    timestamp: datetime


class DatabaseStatusResponse(BaseModel):
    connected: bool
    movie_count: int
