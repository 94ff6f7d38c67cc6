from invix.core.config import settings
from invix.core.logger import logger
from invix.core.security import hash_password
from invix.db.base import Base
from invix.db.row_store import RowStore
from invix.db.session import SessionLocal, engine


def seed_initial_admin(rows: RowStore) -> bool:
    """INITIAL_ADMIN_* tanımlıysa ve admin yoksa ilk admini oluşturur."""
    username = settings.INITIAL_ADMIN_USERNAME
    password = settings.INITIAL_ADMIN_PASSWORD
    if not username or not password:
        return False

    if rows.select("admins", {"username": username}):
        return False

    rows.insert("admins", {
        "username": username,
        "password_hash": hash_password(password),
        "is_active": True,
        "is_super_admin": True,
    })
    logger.info(f"INITIAL ADMIN CREATED | username={username}")
    return True


def init_master_db(bind=None):
    bind = bind or engine

    logger.info("MASTER DB INIT STARTED")
    Base.metadata.create_all(bind=bind)
    logger.info("MASTER DB TABLES CREATED")

    db = SessionLocal(bind=bind)
    try:
        seed_initial_admin(RowStore(db))
    finally:
        db.close()
