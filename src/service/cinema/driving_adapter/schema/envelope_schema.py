from typing import Generic, List, TypeVar

from pydantic import BaseModel


T = TypeVar('T')


class ApiResponse(BaseModel, Generic[T]):
    success: bool = True
    message: str
    data: T


class ApiListResponse(BaseModel, Generic[T]):
    success: bool = True
    message: str
    data: List[T]
    count: int
