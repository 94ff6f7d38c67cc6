from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from invix.core.config import settings


def build_engine(url: str):
    if url.startswith("sqlite"):
        # tek bağlantı: bellek içi veritabanı thread'ler arası paylaşılsın
        return create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(url, pool_pre_ping=True)


engine = build_engine(settings.MASTER_DB_URL)
SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def get_master_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
