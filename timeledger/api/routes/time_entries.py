from __future__ import annotations

from fastapi import APIRouter, Depends, status

from timeledger.api.deps import get_store
from timeledger.api.schemas import TimeEntryCreate, TimeEntryOut
from timeledger.storage import DataStore

router = APIRouter(prefix="/tasks/{task_id}/time-entries", tags=["time"])


@router.get("", response_model=list[TimeEntryOut])
def list_time_entries(task_id: str, store: DataStore = Depends(get_store)):
    store.get_task(task_id)
    return [TimeEntryOut.from_entry(entry) for entry in store.ledger.entries_for_task(task_id)]


@router.post("", response_model=TimeEntryOut, status_code=status.HTTP_201_CREATED)
def create_time_entry(task_id: str, payload: TimeEntryCreate, store: DataStore = Depends(get_store)):
    store.get_task(task_id)
    worker = store.resolve_worker(payload.worker_id, payload.worker_name)
    entry = store.record_time(
        task_id,
        worker,
        work_date=payload.date,
        start=payload.start,
        end=payload.end,
        deduct_break=payload.deduct_break,
        recorded_by=payload.recorded_by,
    )
    return TimeEntryOut.from_entry(entry)
