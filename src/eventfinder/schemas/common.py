"""
Response envelope shared by all endpoints
"""
from typing import Dict, Generic, Optional, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """{success, data, count, message, error, errors} - routes exclude None fields"""
    success: bool = True
    data: Optional[T] = None
    count: Optional[int] = None
    message: Optional[str] = None
    error: Optional[str] = None
    errors: Optional[Dict[str, str]] = None
