from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException

from invix.core.errors import RowStoreError
from invix.core.logger import logger
from invix.core.session import ClientPrincipal
from invix.db.row_store import RowStore
from invix.dependencies.auth import require_client
from invix.dependencies.db import get_row_store
from invix.schemas.clients import ClientOut
from invix.services.session_store import SessionStore

router = APIRouter(tags=["Client Dashboard"])


@router.get("/dashboard")
def client_dashboard(
    store: SessionStore = Depends(require_client),
    rows: RowStore = Depends(get_row_store),
):
    # tüm sorgular tenant anahtarı ile filtrelenir
    try:
        found = rows.select("clients", {"client_id": store.client_id})
    except RowStoreError as e:
        logger.error(f"DASHBOARD LOOKUP FAILED | client_id={store.client_id} | {e}")
        raise HTTPException(status_code=502, detail="Failed to load company profile")

    if not found:
        raise HTTPException(status_code=404, detail="Client not found")

    return {
        "client_id": store.client_id,
        "company": ClientOut(**asdict(ClientPrincipal.from_row(found[0]))),
    }
