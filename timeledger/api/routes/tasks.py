from __future__ import annotations

from uuid import uuid4

from fastapi import APIRouter, Depends, status

from timeledger.aggregator import task_summary
from timeledger.api.deps import get_store
from timeledger.api.schemas import OverviewOut, StatusUpdate, TaskCreate, TaskOut, TotalsOut
from timeledger.models import Task, TaskStatus
from timeledger.storage import DataStore

router = APIRouter(tags=["tasks"])


@router.get("/tasks", response_model=list[TaskOut])
def list_tasks(task_status: TaskStatus | None = None, store: DataStore = Depends(get_store)):
    return [
        TaskOut.from_task(task, store.ledger.total_hours_for_task(task.id))
        for task in store.list_tasks(task_status)
    ]


@router.post("/tasks", response_model=TaskOut, status_code=status.HTTP_201_CREATED)
def create_task(payload: TaskCreate, store: DataStore = Depends(get_store)):
    task = store.add_task(
        Task(
            id=payload.id or str(uuid4()),
            title=payload.title,
            estimated_hours=payload.estimated_hours,
            status=payload.status,
            machine=payload.machine,
        )
    )
    store.save()
    return TaskOut.from_task(task, 0.0)


@router.patch("/tasks/{task_id}/status", response_model=TaskOut)
def update_status(task_id: str, payload: StatusUpdate, store: DataStore = Depends(get_store)):
    task = store.set_task_status(task_id, payload.status)
    store.save()
    return TaskOut.from_task(task, store.ledger.total_hours_for_task(task.id))


@router.get("/tasks/{task_id}/totals", response_model=TotalsOut)
def task_totals(task_id: str, store: DataStore = Depends(get_store)):
    return TotalsOut.from_summary(task_summary(store.get_task(task_id), store.ledger))


@router.get("/overview", response_model=OverviewOut)
def get_overview(store: DataStore = Depends(get_store)):
    return OverviewOut.from_overview(store.overview())
