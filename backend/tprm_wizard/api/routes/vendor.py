"""Step 1: vendor overview endpoints."""

from fastapi import APIRouter, Depends

from tprm_wizard.api.dependencies import get_store
from tprm_wizard.models.entities import Vendor
from tprm_wizard.models.requests import VendorPatch
from tprm_wizard.services.wizard_store import WizardStore

router = APIRouter()


@router.patch(
    "/sessions/{session_id}/vendor",
    response_model=Vendor,
)
async def update_vendor(
    patch: VendorPatch, store: WizardStore = Depends(get_store)
):
    """
    Update vendor overview fields.

    A new vendor name is also filled into every scenario whose
    vendor name is still blank.
    """
    return store.set_vendor_field(patch.to_patch())
