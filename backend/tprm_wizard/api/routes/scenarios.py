"""Steps 2-4: risk scenarios, FAIR inputs and FAIR results."""

from fastapi import APIRouter, Depends, HTTPException

from tprm_wizard.api.dependencies import get_store
from tprm_wizard.models.entities import InputSet, ResultSet, Scenario
from tprm_wizard.models.requests import InputsPatch, ResultsPatch, ScenarioPatch
from tprm_wizard.models.responses import DeleteResponse
from tprm_wizard.services.wizard_store import WizardStore

router = APIRouter()


@router.post(
    "/sessions/{session_id}/scenarios",
    response_model=Scenario,
    status_code=201,
)
async def add_scenario(store: WizardStore = Depends(get_store)):
    """Add a scenario pre-filled with the current vendor name."""
    return store.add_scenario()


@router.patch(
    "/sessions/{session_id}/scenarios/{scenario_id}",
    response_model=Scenario,
)
async def update_scenario(
    scenario_id: str,
    patch: ScenarioPatch,
    store: WizardStore = Depends(get_store),
):
    """Update scenario narrative fields."""
    scenario = store.update_scenario(scenario_id, patch.to_patch())
    if scenario is None:
        raise HTTPException(status_code=404, detail="Scenario not found")
    return scenario


@router.delete(
    "/sessions/{session_id}/scenarios/{scenario_id}",
    response_model=DeleteResponse,
)
async def remove_scenario(scenario_id: str, store: WizardStore = Depends(get_store)):
    """Remove a scenario with its inputs, results, treatments and decision."""
    if store.remove_scenario(scenario_id):
        return DeleteResponse(success=True)
    return DeleteResponse(success=False, error="Scenario not found")


@router.get(
    "/sessions/{session_id}/scenarios/{scenario_id}/inputs",
    response_model=InputSet,
)
async def get_inputs(scenario_id: str, store: WizardStore = Depends(get_store)):
    """Get FAIR inputs, empty if never captured."""
    if store.find_scenario(scenario_id) is None:
        raise HTTPException(status_code=404, detail="Scenario not found")
    return store.get_inputs(scenario_id)


@router.patch(
    "/sessions/{session_id}/scenarios/{scenario_id}/inputs",
    response_model=InputSet,
)
async def upsert_inputs(
    scenario_id: str,
    patch: InputsPatch,
    store: WizardStore = Depends(get_store),
):
    """Capture FAIR input ranges and assumptions for a scenario."""
    inputs = store.upsert_inputs(scenario_id, patch.to_patch())
    if inputs is None:
        raise HTTPException(status_code=404, detail="Scenario not found")
    return inputs


@router.get(
    "/sessions/{session_id}/scenarios/{scenario_id}/results",
    response_model=ResultSet,
)
async def get_results(scenario_id: str, store: WizardStore = Depends(get_store)):
    """Get FAIR results, empty if never captured."""
    if store.find_scenario(scenario_id) is None:
        raise HTTPException(status_code=404, detail="Scenario not found")
    return store.get_results(scenario_id)


@router.patch(
    "/sessions/{session_id}/scenarios/{scenario_id}/results",
    response_model=ResultSet,
)
async def upsert_results(
    scenario_id: str,
    patch: ResultsPatch,
    store: WizardStore = Depends(get_store),
):
    """Capture FAIR outcome figures for a scenario."""
    results = store.upsert_results(scenario_id, patch.to_patch())
    if results is None:
        raise HTTPException(status_code=404, detail="Scenario not found")
    return results
