from datetime import datetime
from pydantic import BaseModel
from typing import Optional


class ClientOut(BaseModel):
    id: str
    client_id: str
    company_name: str
    username: str
    email: Optional[str] = None
    phone: Optional[str] = None
    access_status: bool
    subscription_status: str
    last_login: Optional[datetime] = None


class AccessUpdate(BaseModel):
    access_status: bool
