"""Step 5: treatment option endpoints."""

from fastapi import APIRouter, Depends, HTTPException

from tprm_wizard.api.dependencies import get_store
from tprm_wizard.models.entities import Treatment
from tprm_wizard.models.requests import TreatmentPatch
from tprm_wizard.models.responses import DeleteResponse
from tprm_wizard.services.wizard_store import WizardStore

router = APIRouter()


@router.post(
    "/sessions/{session_id}/scenarios/{scenario_id}/treatments",
    response_model=Treatment,
    status_code=201,
)
async def add_treatment(scenario_id: str, store: WizardStore = Depends(get_store)):
    """Add an empty treatment option to a scenario."""
    treatment = store.add_treatment(scenario_id)
    if treatment is None:
        raise HTTPException(status_code=404, detail="Scenario not found")
    return treatment


@router.patch(
    "/sessions/{session_id}/treatments/{treatment_id}",
    response_model=Treatment,
)
async def update_treatment(
    treatment_id: str,
    patch: TreatmentPatch,
    store: WizardStore = Depends(get_store),
):
    """Update a treatment option."""
    treatment = store.update_treatment(treatment_id, patch.to_patch())
    if treatment is None:
        raise HTTPException(status_code=404, detail="Treatment not found")
    return treatment


@router.delete(
    "/sessions/{session_id}/treatments/{treatment_id}",
    response_model=DeleteResponse,
)
async def remove_treatment(treatment_id: str, store: WizardStore = Depends(get_store)):
    """Delete a treatment option."""
    if store.remove_treatment(treatment_id):
        return DeleteResponse(success=True)
    return DeleteResponse(success=False, error="Treatment not found")
