from fastapi import Depends
from sqlalchemy.orm import Session

from invix.db.row_store import RowStore
from invix.db.session import get_master_db


def get_row_store(db: Session = Depends(get_master_db)) -> RowStore:
    return RowStore(db)
