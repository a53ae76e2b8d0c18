"""API request/response schemas."""

from __future__ import annotations
from pydantic import BaseModel

from shedframe.models import (
    BOMRow, BuildingConfiguration, BuildingFrame, FrameParams, GenerationConfig,
)


class GenerateRequest(BaseModel):
    """Request body for the /generate and /cutting-list endpoints."""
    config: BuildingConfiguration = BuildingConfiguration()
    params: FrameParams = FrameParams()
    generation: GenerationConfig = GenerationConfig()


class DimensionsRequest(BaseModel):
    config: BuildingConfiguration = BuildingConfiguration()


class GenerateResponse(BaseModel):
    """Response from the /generate endpoint."""
    frame: BuildingFrame
    rule_count: int
    member_count: int


class CuttingListResponse(BaseModel):
    rows: list[BOMRow]
    events: list[str] = []


class RuleInfo(BaseModel):
    id: str
    name: str
    category: str
