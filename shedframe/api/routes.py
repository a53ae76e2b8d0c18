"""FastAPI route definitions."""

from __future__ import annotations

from fastapi import APIRouter

from shedframe.bom.aggregator import build_cutting_list
from shedframe.models import ResolvedDimensions
from shedframe.services.frame_service import FrameService
from shedframe.api.schemas import (
    CuttingListResponse, DimensionsRequest, GenerateRequest, GenerateResponse, RuleInfo,
)

router = APIRouter()

# Shared service instance
_service = FrameService()


@router.post("/generate", response_model=GenerateResponse)
async def generate_frame(request: GenerateRequest) -> GenerateResponse:
    """Generate the full member set for a configuration snapshot."""
    frame = _service.generate(request.config, request.params, request.generation)

    return GenerateResponse(
        frame=frame,
        rule_count=len(_service.list_rules()),
        member_count=len(frame.members),
    )


@router.post("/dimensions", response_model=ResolvedDimensions)
async def resolve(request: DimensionsRequest) -> ResolvedDimensions:
    """Resolve base / frame / roof rectangles."""
    return _service.dimensions(request.config)


@router.post("/cutting-list", response_model=CuttingListResponse)
async def cutting_list(request: GenerateRequest) -> CuttingListResponse:
    """Grouped, sorted cutting list plus any door snapping events."""
    frame = _service.generate(request.config, request.params, request.generation)
    return CuttingListResponse(rows=build_cutting_list(frame), events=frame.events)


@router.get("/rules", response_model=list[RuleInfo])
async def list_rules() -> list[RuleInfo]:
    """List all available framing rules."""
    return [RuleInfo(**r) for r in _service.list_rules()]


@router.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}
