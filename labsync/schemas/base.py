from pydantic import BaseModel
from pydantic.alias_generators import to_camel
from typing import Optional, Generic, TypeVar

T = TypeVar('T')

class ResponseBase(BaseModel, Generic[T]):
    """기본 응답 스키마"""
    success: bool
    message: Optional[str] = None
    error: Optional[str] = None
    data: Optional[T] = None

class CamelModel(BaseModel):
    """camelCase JSON 필드를 사용하는 스키마"""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
