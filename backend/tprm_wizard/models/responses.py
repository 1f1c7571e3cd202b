"""API response models."""

from typing import Any, Optional

from pydantic import BaseModel, Field

from tprm_wizard.models.entities import (
    Decision,
    InputSet,
    ResultSet,
    Scenario,
    Treatment,
    Vendor,
)


class WizardStateResponse(BaseModel):
    """Full state of a wizard session.

    ``inputs`` and ``results`` hold one record per scenario, in scenario
    order, with empty records for scenarios never edited.
    """

    session_id: str
    vendor: Vendor
    scenarios: list[Scenario]
    inputs: list[InputSet]
    results: list[ResultSet]
    treatments: list[Treatment]
    decisions: list[Decision]


class StepViewResponse(BaseModel):
    """The slice of state one wizard step is bound to."""

    session_id: str
    step: int
    total_steps: int
    title: str
    subtitle: str
    can_continue: bool
    data: dict[str, Any] = Field(default_factory=dict)


class DeleteResponse(BaseModel):
    """Response after removing a record or session."""

    success: bool
    error: Optional[str] = None


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: str
    detail: Optional[str] = None
    code: Optional[str] = None
