from __future__ import annotations

from pydantic import BaseModel


class RegisterRequest(BaseModel):
    email: str = ""
    password: str = ""
    name: str = ""


class LoginRequest(BaseModel):
    email: str = ""
    password: str = ""


class User(BaseModel):
    email: str
    name: str
