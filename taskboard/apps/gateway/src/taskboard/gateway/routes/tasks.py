"""Task resource routes

GET    /api/tasks                 list, newest first
GET    /api/tasks/stats/summary   aggregate stats (also /api/tasks/stats)
GET    /api/tasks/{task_id}       one record
POST   /api/tasks                 create -> 201
PUT    /api/tasks/{task_id}       sparse update
DELETE /api/tasks/{task_id}       hard delete

Error translation lives in ..errors; routes only call the service.
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from taskboard.core.models import Record, RecordDraft, RecordPatch, RecordStats

from ..deps import get_record_store
from ..services.record_service import RecordService

router = APIRouter()


class DeleteResponse(BaseModel):
    """Deletion confirmation"""

    message: str


@router.get("/api/tasks", response_model=list[Record])
async def list_tasks(store=Depends(get_record_store)):
    """All records, newest-created first"""
    return await RecordService(store).list_records()


# Registered before /api/tasks/{task_id} so "stats" is never read as an id
@router.get("/api/tasks/stats/summary", response_model=RecordStats)
@router.get("/api/tasks/stats", response_model=RecordStats, include_in_schema=False)
async def get_stats(store=Depends(get_record_store)):
    """Totals, completion split, overdue count and priority breakdown"""
    return await RecordService(store).get_stats()


@router.get("/api/tasks/{task_id}", response_model=Record)
async def get_task(task_id: str, store=Depends(get_record_store)):
    return await RecordService(store).get_record(task_id)


@router.post("/api/tasks", response_model=Record, status_code=201)
async def create_task(
    draft: RecordDraft | None = None,
    store=Depends(get_record_store),
):
    """Create a record; a missing body is treated like a missing title"""
    return await RecordService(store).create_record(draft or RecordDraft())


@router.put("/api/tasks/{task_id}", response_model=Record)
async def update_task(
    task_id: str,
    patch: RecordPatch | None = None,
    store=Depends(get_record_store),
):
    """Sparse update: fields absent from the body are left untouched"""
    return await RecordService(store).update_record(task_id, patch or RecordPatch())


@router.delete("/api/tasks/{task_id}", response_model=DeleteResponse)
async def delete_task(task_id: str, store=Depends(get_record_store)):
    await RecordService(store).delete_record(task_id)
    return DeleteResponse(message="Task deleted successfully")
