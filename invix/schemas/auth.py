from pydantic import BaseModel, Field
from typing import List, Optional
from typing_extensions import Annotated


class LoginRequest(BaseModel):
    username: Annotated[str, Field(min_length=1, max_length=255)]
    password: Annotated[str, Field(min_length=1)]


class RegisterRequest(BaseModel):
    company_name: Annotated[str, Field(min_length=1, max_length=255)]
    password: Annotated[str, Field(min_length=1)]
    email: Optional[Annotated[str, Field(max_length=255)]] = None
    phone: Optional[Annotated[str, Field(max_length=50)]] = None


class NotificationOut(BaseModel):
    title: str
    description: str
    severity: str


class AuthResponse(BaseModel):
    success: bool
    redirect_to: Optional[str] = None
    notifications: List[NotificationOut] = []


class SessionStateResponse(BaseModel):
    is_loading: bool
    client_authenticated: bool
    admin_authenticated: bool
    client_id: Optional[str] = None
    admin_id: Optional[str] = None
