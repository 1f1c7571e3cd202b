"""API request models with validation.

Patch bodies carry whole-field values. Only fields present in the request
body are applied (``exclude_unset``); every value is stored as text.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict


class PatchRequest(BaseModel):
    """Base for partial-update bodies."""

    # Numbers typed into FAIR fields are kept as their string form
    model_config = ConfigDict(coerce_numbers_to_str=True, extra="ignore")

    def to_patch(self) -> dict[str, Any]:
        # An explicit null leaves the stored value untouched
        return {
            key: value
            for key, value in self.model_dump(exclude_unset=True).items()
            if value is not None
        }


class VendorPatch(PatchRequest):
    """Step 1: vendor overview fields."""

    vendor_name: Optional[str] = None
    category: Optional[str] = None
    business_owner: Optional[str] = None
    critical_function: Optional[str] = None
    data_types: Optional[str] = None
    geography: Optional[str] = None
    contract_status: Optional[str] = None
    contract_start: Optional[str] = None
    contract_end: Optional[str] = None


class ScenarioPatch(PatchRequest):
    """Step 2: risk scenario narrative fields."""

    vendor_name: Optional[str] = None
    asset_at_risk: Optional[str] = None
    threat_actor: Optional[str] = None
    threat_event: Optional[str] = None
    loss_event: Optional[str] = None
    primary_loss_types: Optional[str] = None
    secondary_loss_types: Optional[str] = None
    description: Optional[str] = None


class InputsPatch(PatchRequest):
    """Step 3: FAIR input ranges and assumptions."""

    tef_low: Optional[str] = None
    tef_high: Optional[str] = None
    vuln_low: Optional[str] = None
    vuln_high: Optional[str] = None
    lm_primary: Optional[str] = None
    lm_secondary: Optional[str] = None
    assumptions: Optional[str] = None


class ResultsPatch(PatchRequest):
    """Step 4: FAIR outcome figures."""

    expected_annual_loss: Optional[str] = None
    p90: Optional[str] = None
    p95: Optional[str] = None
    drivers: Optional[str] = None


class TreatmentPatch(PatchRequest):
    """Step 5: treatment option fields."""

    control: Optional[str] = None
    annual_cost: Optional[str] = None
    annual_risk_reduction: Optional[str] = None
    residual_risk: Optional[str] = None
    owner: Optional[str] = None


class DecisionPatch(PatchRequest):
    """Step 6: decision record fields."""

    decision: Optional[str] = None
    rationale: Optional[str] = None
    approved_by: Optional[str] = None
    decision_date: Optional[str] = None
    next_review: Optional[str] = None
