from typing import Any, Dict, List, Optional

from sqlalchemy import insert, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from invix.core.config import settings
from invix.core.errors import RowStoreError
from invix.db.base import Base
from invix.models import master  # noqa: F401  (tabloları metadata'ya kaydeder)


def _is_unique_violation(exc: SQLAlchemyError) -> bool:
    if not isinstance(exc, IntegrityError):
        return False
    message = str(exc.orig).lower()
    return "unique" in message or "duplicate key" in message


class RowStore:
    """
    Tablo adı + eşitlik filtresi ile çalışan ince satır deposu.
    Her SQLAlchemy hatası RowStoreError olarak yükseltilir.
    """

    def __init__(self, db: Session):
        self.db = db

    def _table(self, name: str):
        try:
            return Base.metadata.tables[name]
        except KeyError:
            raise RowStoreError(f"Unknown table: {name}")

    def _fail(self, action: str, table: str, exc: SQLAlchemyError):
        self.db.rollback()
        raise RowStoreError(
            f"{action} failed on {table}: {exc}",
            is_unique_violation=_is_unique_violation(exc),
        ) from exc

    def select(
        self,
        table: str,
        filters: Optional[Dict[str, Any]] = None,
        order_by: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """order_by: "created_at" artan, "-created_at" azalan."""
        t = self._table(table)
        stmt = select(t)

        for column, value in (filters or {}).items():
            stmt = stmt.where(t.c[column] == value)

        if order_by:
            column = t.c[order_by.lstrip("-")]
            stmt = stmt.order_by(column.desc() if order_by.startswith("-") else column.asc())

        try:
            rows = self.db.execute(stmt).mappings().all()
        except SQLAlchemyError as e:
            self._fail("SELECT", table, e)

        return [dict(row) for row in rows]

    def insert(self, table: str, record: Dict[str, Any]) -> Dict[str, Any]:
        t = self._table(table)

        try:
            result = self.db.execute(insert(t).values(**record))
            pk = result.inserted_primary_key
            self.db.commit()
        except SQLAlchemyError as e:
            self._fail("INSERT", table, e)

        pk_filters = {col.name: value for col, value in zip(t.primary_key.columns, pk)}
        rows = self.select(table, pk_filters)
        return rows[0]

    def update(self, table: str, filters: Dict[str, Any], patch: Dict[str, Any]) -> int:
        t = self._table(table)
        stmt = update(t).values(**patch)

        for column, value in filters.items():
            stmt = stmt.where(t.c[column] == value)

        try:
            result = self.db.execute(stmt)
            self.db.commit()
        except SQLAlchemyError as e:
            self._fail("UPDATE", table, e)

        return result.rowcount

    def generate_client_id(self) -> str:
        """Yeni, benzersiz tenant kimliği (ör. CLT000042)."""
        try:
            result = self.db.execute(insert(self._table("client_id_sequence")).values())
            number = result.inserted_primary_key[0]
            self.db.commit()
        except SQLAlchemyError as e:
            self._fail("GENERATE_CLIENT_ID", "client_id_sequence", e)

        return f"{settings.CLIENT_ID_PREFIX}{number:06d}"
