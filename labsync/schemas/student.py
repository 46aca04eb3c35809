from pydantic import BaseModel, EmailStr, field_validator
from datetime import datetime
from typing import Optional
from labsync.utils.hackerrank_urls import is_valid_external_username

class StudentProfileUpdate(BaseModel):
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    hackerrank_username: Optional[str] = None

    @field_validator("hackerrank_username")
    @classmethod
    def check_username(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = value.strip()
        # 빈 문자열은 연결 해제로 처리
        if not value:
            return ""
        if not is_valid_external_username(value):
            raise ValueError("Invalid HackerRank username format")
        return value

class StudentProfileResponse(BaseModel):
    id: str
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    hackerrank_username: Optional[str] = None
    hackerrank_verified: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
