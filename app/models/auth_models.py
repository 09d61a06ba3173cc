# app/models/auth_models.py
from typing import List, Optional

from pydantic import BaseModel, Field


class PasswordValidationError(Exception):
    def __init__(self, messages: List[str]):
        self.messages = messages
        super().__init__(", ".join(messages))


class ValidationError(BaseModel):
    loc: List[str]
    msg: str
    type: str


class TokenData(BaseModel):
    email: Optional[str] = None


class UserCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: str
    password: str
    userId: str = Field(..., min_length=1, max_length=30)


class LoginRequest(BaseModel):
    email: str
    password: str
