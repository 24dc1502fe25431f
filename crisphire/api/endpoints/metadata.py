"""
Metadata API endpoints

Provides reference data for:
- Roles
- Presentation modes
- Language models
"""

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from crisphire.api.dependencies import get_engine
from crisphire.config.settings import get_settings
from crisphire.models.interview import InterviewMode
from crisphire.models.roles import Role

router = APIRouter()


# ============================================================================
# REQUEST/RESPONSE MODELS
# ============================================================================

class RoleInfo(BaseModel):
    """Information about a role."""
    id: str
    name: str
    focus_areas: list[str]


class ModelsResponse(BaseModel):
    """Selectable language models."""
    available: list[str]
    selected: str


class SelectModelRequest(BaseModel):
    """Request model for switching language model."""
    model: str


# ============================================================================
# ENDPOINTS
# ============================================================================

@router.get("/roles")
async def get_roles() -> list[RoleInfo]:
    """Get all available interview roles."""
    return [
        RoleInfo(id=role.name.lower(), name=role.value, focus_areas=role.focus_areas)
        for role in Role
    ]


@router.get("/modes")
async def get_modes() -> list[dict[str, str]]:
    """Get available interview presentation modes."""
    descriptions = {
        InterviewMode.CHAT: "Text chat with the interviewer",
        InterviewMode.AVATAR: "Spoken interview with an animated interviewer",
    }
    return [
        {"id": mode.value, "description": descriptions[mode]}
        for mode in InterviewMode
    ]


@router.get("/models", response_model=ModelsResponse)
async def get_models() -> ModelsResponse:
    """Get the selectable models and the one in use."""
    return ModelsResponse(
        available=get_settings().available_models,
        selected=get_engine().store.selected_model,
    )


@router.put("/models/selected", response_model=ModelsResponse)
async def select_model(request: SelectModelRequest) -> ModelsResponse:
    """Switch the model used for all subsequent calls."""
    engine = get_engine()
    try:
        engine.select_model(request.model)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return ModelsResponse(
        available=engine.settings.available_models,
        selected=engine.store.selected_model,
    )
