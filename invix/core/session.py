from dataclasses import dataclass, asdict
from datetime import datetime
from enum import Enum
from typing import Optional


class PrincipalKind(str, Enum):
    CLIENT = "client"
    ADMIN = "admin"


@dataclass(frozen=True)
class ClientPrincipal:
    id: str                      # satır id (uuid)
    client_id: str               # tenant anahtarı
    company_name: str
    username: str
    access_status: bool
    subscription_status: str
    last_login: Optional[datetime] = None
    email: Optional[str] = None
    phone: Optional[str] = None

    @classmethod
    def from_row(cls, row: dict) -> "ClientPrincipal":
        return cls(
            id=str(row["id"]),
            client_id=row["client_id"],
            company_name=row["company_name"],
            username=row["username"],
            access_status=bool(row["access_status"]),
            subscription_status=row["subscription_status"],
            last_login=row.get("last_login"),
            email=row.get("email"),
            phone=row.get("phone"),
        )


@dataclass(frozen=True)
class AdminPrincipal:
    id: str
    username: str
    is_super_admin: bool = False
    is_active: bool = True
    email: Optional[str] = None
    full_name: Optional[str] = None
    last_login: Optional[datetime] = None

    @classmethod
    def from_row(cls, row: dict) -> "AdminPrincipal":
        return cls(
            id=str(row["id"]),
            username=row["username"],
            is_super_admin=bool(row.get("is_super_admin")),
            is_active=bool(row.get("is_active", True)),
            email=row.get("email"),
            full_name=row.get("full_name"),
            last_login=row.get("last_login"),
        )

    def to_display(self) -> dict:
        data = asdict(self)
        data["last_login"] = self.last_login.isoformat() if self.last_login else None
        return data

    @classmethod
    def from_display(cls, data: dict) -> "AdminPrincipal":
        last_login = data.get("last_login")
        return cls(
            id=str(data["id"]),
            username=data["username"],
            is_super_admin=bool(data.get("is_super_admin")),
            is_active=bool(data.get("is_active", True)),
            email=data.get("email"),
            full_name=data.get("full_name"),
            last_login=datetime.fromisoformat(last_login) if last_login else None,
        )


@dataclass(frozen=True)
class Session:
    token: str
    kind: PrincipalKind
    principal_id: str
