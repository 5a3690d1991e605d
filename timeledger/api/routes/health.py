from fastapi import APIRouter, Depends

from timeledger.api.deps import get_store
from timeledger.storage import DataStore

router = APIRouter(prefix="/health", tags=["health"])


@router.get("", summary="Liveness probe")
def healthcheck(store: DataStore = Depends(get_store)) -> dict[str, str | int]:
    return {"status": "ok", "tasks": len(store.tasks), "time_entries": len(store.ledger)}
