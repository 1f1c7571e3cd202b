"""Wizard session endpoints."""

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from tprm_wizard.api.dependencies import (
    build_state_response,
    get_store,
    validate_session_id,
)
from tprm_wizard.models.responses import (
    DeleteResponse,
    StepViewResponse,
    WizardStateResponse,
)
from tprm_wizard.services.session_registry import session_registry
from tprm_wizard.services.wizard_store import TOTAL_STEPS, WIZARD_STEPS, WizardStore

router = APIRouter()


def _dump(value):
    if isinstance(value, BaseModel):
        return value.model_dump()
    if isinstance(value, list):
        return [_dump(item) for item in value]
    return value


@router.post(
    "/sessions",
    response_model=WizardStateResponse,
    status_code=201,
)
async def create_session():
    """
    Start a new vendor profile wizard.

    The session lives in memory only and is discarded after
    the configured TTL or on DELETE.
    """
    session_id, store = session_registry.create()
    return build_state_response(session_id, store)


@router.get(
    "/sessions/{session_id}",
    response_model=WizardStateResponse,
)
async def get_session(session_id: str, store: WizardStore = Depends(get_store)):
    """Get the full wizard state of a session."""
    return build_state_response(session_id, store)


@router.delete(
    "/sessions/{session_id}",
    response_model=DeleteResponse,
)
async def delete_session(session_id: str):
    """Discard a wizard session and everything captured in it."""
    validate_session_id(session_id)
    if session_registry.delete(session_id):
        return DeleteResponse(success=True)
    return DeleteResponse(success=False, error="Session not found")


@router.get(
    "/sessions/{session_id}/steps/{step}",
    response_model=StepViewResponse,
)
async def get_step(
    session_id: str, step: int, store: WizardStore = Depends(get_store)
):
    """Get the data a wizard step displays and whether it can advance."""
    if not 1 <= step <= TOTAL_STEPS:
        raise HTTPException(status_code=404, detail="Step not found")

    meta = WIZARD_STEPS[step - 1]
    view = store.step_view(step)
    return StepViewResponse(
        session_id=session_id,
        step=step,
        total_steps=TOTAL_STEPS,
        title=meta.title,
        subtitle=meta.subtitle,
        can_continue=store.can_continue(step),
        data={key: _dump(value) for key, value in view.items()},
    )
