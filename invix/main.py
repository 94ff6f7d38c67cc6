from contextlib import asynccontextmanager
from fastapi import FastAPI
from invix.db.init_master import init_master_db
from invix.routers import admin, auth, dashboard


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_master_db()
    yield

app = FastAPI(
    title="InviX ERP Backend",
    version="1.0.0",
    lifespan=lifespan
)

app.include_router(auth.router)
app.include_router(admin.router)
app.include_router(dashboard.router)
