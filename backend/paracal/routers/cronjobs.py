# backend/paracal/routers/cronjobs.py
from __future__ import annotations

from typing import Optional
import logging

from fastapi import APIRouter, Depends, HTTPException, Path, Request

from paracal.config import get_settings
from paracal.schemas.cronjob import (
    ApiResponse,
    CronjobCreate,
    CronjobOut,
    CronjobTestRequest,
    CronjobUpdate,
)
from paracal.services.scheduler import CronjobService


router = APIRouter(prefix="/cronjobs", tags=["cronjobs"])
logger = logging.getLogger(__name__)


def get_cronjob_service(request: Request) -> CronjobService:
    return request.app.state.cronjob_service


def _out(cfg) -> dict:
    return CronjobOut.model_validate(cfg).model_dump(mode="json")


@router.get("", response_model=ApiResponse, response_model_exclude_none=True)
def list_cronjobs(svc: CronjobService = Depends(get_cronjob_service)):
    return ApiResponse(success=True, data=[_out(c) for c in svc.list_configs()])


@router.get("/status", response_model=ApiResponse, response_model_exclude_none=True)
def cronjob_status(svc: CronjobService = Depends(get_cronjob_service)):
    running = get_settings().SCHEDULER_ENABLED
    data = [
        {
            "id": c.id,
            "name": c.name,
            "enabled": c.enabled,
            "schedule_time": c.schedule_time,
            "running": running,
            "last_execution": svc.last_executions.get(c.id),
        }
        for c in svc.enabled_configs()
    ]
    return ApiResponse(success=True, data=data)


@router.get("/{cronjob_id}", response_model=ApiResponse, response_model_exclude_none=True)
def get_cronjob(cronjob_id: int = Path(..., ge=1), svc: CronjobService = Depends(get_cronjob_service)):
    cfg = svc.get_config(cronjob_id)
    if cfg is None:
        logger.warning("[cronjobs] Cronjob configuration %s not found", cronjob_id)
        raise HTTPException(status_code=404, detail=f"Cronjob configuration {cronjob_id} not found")
    return ApiResponse(success=True, data=_out(cfg))


@router.post("", status_code=201, response_model=ApiResponse, response_model_exclude_none=True)
def create_cronjob(payload: CronjobCreate, svc: CronjobService = Depends(get_cronjob_service)):
    """
    POST /cronjobs
    Body: { "name": "Daily digest", "schedule_time": "09:00", "webhook_url": "https://...",
            "notification_days": 1, "notification_type": "daily" }
    """
    cfg = svc.create_config(payload.model_dump())
    logger.info("[cronjobs] Created cronjob config: %s", cfg.name)
    return ApiResponse(
        success=True, data=_out(cfg), message="Cronjob configuration created successfully"
    )


@router.put("/{cronjob_id}", response_model=ApiResponse, response_model_exclude_none=True)
def update_cronjob(
    payload: CronjobUpdate,
    cronjob_id: int = Path(..., ge=1),
    svc: CronjobService = Depends(get_cronjob_service),
):
    cfg = svc.update_config(cronjob_id, payload.model_dump(exclude_unset=True))
    logger.info("[cronjobs] Updated cronjob config: %s", cfg.name)
    return ApiResponse(
        success=True, data=_out(cfg), message="Cronjob configuration updated successfully"
    )


@router.delete("/{cronjob_id}", response_model=ApiResponse, response_model_exclude_none=True)
def delete_cronjob(cronjob_id: int = Path(..., ge=1), svc: CronjobService = Depends(get_cronjob_service)):
    svc.delete_config(cronjob_id)
    logger.info("[cronjobs] Deleted cronjob config: %s", cronjob_id)
    return ApiResponse(success=True, message="Cronjob configuration deleted successfully")


@router.post("/{cronjob_id}/test", response_model=ApiResponse, response_model_exclude_none=True)
def test_cronjob(
    payload: Optional[CronjobTestRequest] = None,
    cronjob_id: int = Path(..., ge=1),
    svc: CronjobService = Depends(get_cronjob_service),
):
    """
    Sends the configured message immediately, even when there are no events.
    Body (optional): { "customMessage": "..." }
    """
    custom = payload.custom_message if payload else None
    result = svc.test_notification(cronjob_id, custom)
    if result["success"]:
        return ApiResponse(success=True, message="Test notification sent successfully")
    return ApiResponse(success=False, message=result.get("error"), error=result.get("error"))
