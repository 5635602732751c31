from __future__ import annotations

from fastapi import APIRouter, Depends

from stopmatch.adapters.api.dependencies import get_network_admin_service
from stopmatch.adapters.api.presenters import checkpoint_to_schema
from stopmatch.adapters.api.schemas.checkpoints import (
    AddCheckpointRequestSchema,
    CheckCheckpointRequestSchema,
    CheckpointCreatedSchema,
    CheckpointExistsSchema,
)
from stopmatch.app.services.network_admin_service import NetworkAdminService
from stopmatch.domain.models import GeoPoint

router = APIRouter(tags=["checkpoints"])


@router.post("/addcheckpoint", response_model=CheckpointCreatedSchema, status_code=201)
def add_checkpoint(
    req: AddCheckpointRequestSchema,
    service: NetworkAdminService = Depends(get_network_admin_service),
) -> CheckpointCreatedSchema:
    checkpoint = service.add_checkpoint(
        location=GeoPoint.parse(req.lt, req.ln), name=req.name or ""
    )
    return CheckpointCreatedSchema(
        message="Checkpoint added successfully",
        data=checkpoint_to_schema(checkpoint),
    )


@router.post("/checkcheckpoint", response_model=CheckpointExistsSchema)
def check_checkpoint(
    req: CheckCheckpointRequestSchema,
    service: NetworkAdminService = Depends(get_network_admin_service),
) -> CheckpointExistsSchema:
    checkpoint = service.find_checkpoint(req.name or "")
    return CheckpointExistsSchema(
        exists=checkpoint is not None,
        checkpoint=checkpoint_to_schema(checkpoint) if checkpoint else None,
    )
