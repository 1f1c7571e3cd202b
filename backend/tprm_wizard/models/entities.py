"""Wizard entities and their empty-record factories.

Every attribute other than the identifiers is free text. FAIR figures
(frequencies, magnitudes, percentiles, costs) are captured exactly as typed
and are never parsed or range-checked.
"""

import secrets
from typing import Any, ClassVar

from pydantic import BaseModel, Field


def _new_id(prefix: str) -> str:
    """Generate an opaque entity identifier."""
    return f"{prefix}-{secrets.token_hex(8)}"


class WizardEntity(BaseModel):
    """Base for records edited through patch-style updates."""

    # Fields that identify the record and are never patched
    IDENTITY_FIELDS: ClassVar[frozenset[str]] = frozenset()

    def merged(self, patch: dict[str, Any]):
        """Return a copy with ``patch`` applied on top.

        Keys that are not attributes of the entity, and identity keys,
        are ignored.
        """
        fields = type(self).model_fields
        update = {
            key: value
            for key, value in patch.items()
            if key in fields and key not in self.IDENTITY_FIELDS
        }
        return self.model_copy(update=update)


class Vendor(WizardEntity):
    """The single third party profiled in a wizard session."""

    IDENTITY_FIELDS = frozenset({"vendor_id"})

    vendor_id: str = Field(default_factory=lambda: _new_id("V"))
    vendor_name: str = ""
    category: str = "SaaS"
    business_owner: str = ""
    critical_function: str = ""
    data_types: str = ""
    geography: str = "EU"
    contract_status: str = "Active"
    contract_start: str = ""
    contract_end: str = ""


class Scenario(WizardEntity):
    """One named risk narrative associated with the vendor."""

    IDENTITY_FIELDS = frozenset({"scenario_id"})

    scenario_id: str = Field(default_factory=lambda: _new_id("S"))
    vendor_name: str = ""
    asset_at_risk: str = ""
    threat_actor: str = "External cybercriminal"
    threat_event: str = ""
    loss_event: str = ""
    primary_loss_types: str = ""
    secondary_loss_types: str = ""
    description: str = ""


class InputSet(WizardEntity):
    """FAIR input ranges and assumptions for one scenario."""

    IDENTITY_FIELDS = frozenset({"scenario_id"})

    scenario_id: str
    tef_low: str = ""
    tef_high: str = ""
    vuln_low: str = ""
    vuln_high: str = ""
    lm_primary: str = ""
    lm_secondary: str = ""
    assumptions: str = ""


class ResultSet(WizardEntity):
    """FAIR outcome figures for one scenario."""

    IDENTITY_FIELDS = frozenset({"scenario_id"})

    scenario_id: str
    expected_annual_loss: str = ""
    p90: str = ""
    p95: str = ""
    drivers: str = ""


class Treatment(WizardEntity):
    """A proposed control with its estimated cost and benefit."""

    IDENTITY_FIELDS = frozenset({"id", "scenario_id"})

    id: str = Field(default_factory=lambda: _new_id("T"))
    scenario_id: str
    control: str = ""
    annual_cost: str = ""
    annual_risk_reduction: str = ""
    residual_risk: str = ""
    owner: str = ""


class Decision(WizardEntity):
    """The governance outcome recorded for a scenario."""

    IDENTITY_FIELDS = frozenset({"id", "scenario_id"})

    id: str = Field(default_factory=lambda: _new_id("D"))
    scenario_id: str
    decision: str = "Reduce"
    rationale: str = ""
    approved_by: str = ""
    decision_date: str = ""
    next_review: str = ""


def new_vendor() -> Vendor:
    return Vendor()


def new_scenario(vendor_name: str = "") -> Scenario:
    return Scenario(vendor_name=vendor_name)


def empty_inputs(scenario_id: str) -> InputSet:
    return InputSet(scenario_id=scenario_id)


def empty_results(scenario_id: str) -> ResultSet:
    return ResultSet(scenario_id=scenario_id)


def new_treatment(scenario_id: str) -> Treatment:
    return Treatment(scenario_id=scenario_id)


def new_decision(scenario_id: str) -> Decision:
    return Decision(scenario_id=scenario_id)
