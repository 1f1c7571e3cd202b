"""Step 6: decision endpoints."""

from fastapi import APIRouter, Depends, HTTPException

from tprm_wizard.api.dependencies import get_store
from tprm_wizard.models.entities import Decision
from tprm_wizard.models.requests import DecisionPatch
from tprm_wizard.services.wizard_store import WizardStore

router = APIRouter()


@router.post(
    "/sessions/{session_id}/scenarios/{scenario_id}/decision",
    response_model=Decision,
)
async def add_decision(scenario_id: str, store: WizardStore = Depends(get_store)):
    """
    Record a decision for a scenario.

    Each scenario has at most one decision. Calling this again
    returns the existing decision unchanged.
    """
    decision = store.add_decision(scenario_id)
    if decision is None:
        raise HTTPException(status_code=404, detail="Scenario not found")
    return decision


@router.patch(
    "/sessions/{session_id}/decisions/{decision_id}",
    response_model=Decision,
)
async def update_decision(
    decision_id: str,
    patch: DecisionPatch,
    store: WizardStore = Depends(get_store),
):
    """Update a decision record."""
    decision = store.update_decision(decision_id, patch.to_patch())
    if decision is None:
        raise HTTPException(status_code=404, detail="Decision not found")
    return decision
