"""Shared route dependencies."""

from fastapi import HTTPException

from tprm_wizard.models.responses import WizardStateResponse
from tprm_wizard.services.session_registry import session_registry
from tprm_wizard.services.wizard_store import WizardStore


def validate_session_id(session_id: str) -> str:
    """Reject session IDs that are not alphanumeric with hyphens."""
    if not session_id or len(session_id) > 64:
        raise HTTPException(status_code=400, detail="Invalid session ID")
    if not all(c.isalnum() or c == "-" for c in session_id):
        raise HTTPException(
            status_code=400,
            detail="Session ID must be alphanumeric with hyphens only",
        )
    return session_id


def get_store(session_id: str) -> WizardStore:
    """Resolve the wizard store of a session or fail with 404."""
    validate_session_id(session_id)
    store = session_registry.get(session_id)
    if store is None:
        raise HTTPException(status_code=404, detail="Session not found")
    return store


def build_state_response(session_id: str, store: WizardStore) -> WizardStateResponse:
    snapshot = store.snapshot()
    return WizardStateResponse(
        session_id=session_id,
        vendor=snapshot.vendor,
        scenarios=snapshot.scenarios,
        inputs=[snapshot.inputs_for(s.scenario_id) for s in snapshot.scenarios],
        results=[snapshot.results_for(s.scenario_id) for s in snapshot.scenarios],
        treatments=snapshot.treatments,
        decisions=snapshot.decisions,
    )
