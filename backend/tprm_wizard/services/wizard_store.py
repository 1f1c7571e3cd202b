"""In-memory state store for one vendor profile wizard session.

The store holds the vendor record, the ordered scenario list, per-scenario
input and result sets, and the treatment and decision lists. All mutations
are synchronous and local; nothing is persisted.
"""

import logging
from typing import Any, Optional

from pydantic import BaseModel, Field

from tprm_wizard.models.entities import (
    Decision,
    InputSet,
    ResultSet,
    Scenario,
    Treatment,
    Vendor,
    empty_inputs,
    empty_results,
    new_decision,
    new_scenario,
    new_treatment,
    new_vendor,
)

logger = logging.getLogger(__name__)


class WizardStep(BaseModel):
    """Static description of a wizard step."""

    number: int
    title: str
    subtitle: str


WIZARD_STEPS: tuple[WizardStep, ...] = (
    WizardStep(
        number=1,
        title="Vendor Overview",
        subtitle=(
            "Capture business context first. If you cannot explain why this "
            "vendor matters, you are not ready to quantify risk."
        ),
    ),
    WizardStep(
        number=2,
        title="Risk Scenarios",
        subtitle="Define complete scenarios. No tiers, no generic risk statements.",
    ),
    WizardStep(
        number=3,
        title="FAIR Inputs",
        subtitle=(
            "Document ranges and assumptions. The goal is transparency, "
            "not false precision."
        ),
    ),
    WizardStep(
        number=4,
        title="FAIR Results",
        subtitle=(
            "Capture outputs in decision language. The point is "
            "comparability and prioritization."
        ),
    ),
    WizardStep(
        number=5,
        title="Treatment Options",
        subtitle=(
            "Translate controls into measurable risk reduction. If you cannot "
            "quantify impact, you cannot justify investment."
        ),
    ),
    WizardStep(
        number=6,
        title="Decisions",
        subtitle=(
            "Document explicit decisions. If you cannot name the decision "
            "owner, you do not have governance."
        ),
    ),
)

TOTAL_STEPS = len(WIZARD_STEPS)


class WizardSnapshot(BaseModel):
    """Point-in-time copy of a store, used by exports and read endpoints."""

    vendor: Vendor
    scenarios: list[Scenario] = Field(default_factory=list)
    inputs_by_scenario: dict[str, InputSet] = Field(default_factory=dict)
    results_by_scenario: dict[str, ResultSet] = Field(default_factory=dict)
    treatments: list[Treatment] = Field(default_factory=list)
    decisions: list[Decision] = Field(default_factory=list)

    def inputs_for(self, scenario_id: str) -> InputSet:
        """Input set for a scenario, or an empty one if never edited."""
        inputs = self.inputs_by_scenario.get(scenario_id)
        return inputs if inputs is not None else empty_inputs(scenario_id)

    def results_for(self, scenario_id: str) -> ResultSet:
        """Result set for a scenario, or an empty one if never edited."""
        results = self.results_by_scenario.get(scenario_id)
        return results if results is not None else empty_results(scenario_id)

    def find_scenario(self, scenario_id: str) -> Optional[Scenario]:
        return next(
            (s for s in self.scenarios if s.scenario_id == scenario_id), None
        )


class WizardStore:
    """Canonical in-memory state of one wizard session."""

    def __init__(self, seed_initial_scenario: bool = True):
        self.vendor: Vendor = new_vendor()
        self.scenarios: list[Scenario] = []
        # keyed by scenario_id
        self.inputs_by_scenario: dict[str, InputSet] = {}
        self.results_by_scenario: dict[str, ResultSet] = {}
        self.treatments: list[Treatment] = []
        self.decisions: list[Decision] = []

        if seed_initial_scenario:
            self.scenarios.append(new_scenario())

    # ------------------------------------------------------------------
    # Vendor
    # ------------------------------------------------------------------

    def set_vendor_field(self, patch: dict[str, Any]) -> Vendor:
        """
        Merge partial vendor attributes.

        When the vendor name changes, scenarios whose own vendor name is
        still empty are filled with the new name. Scenarios that already
        carry a name keep it.
        """
        previous_name = self.vendor.vendor_name
        self.vendor = self.vendor.merged(patch)

        if self.vendor.vendor_name != previous_name:
            self._propagate_vendor_name(self.vendor.vendor_name)

        return self.vendor

    def _propagate_vendor_name(self, name: str) -> None:
        self.scenarios = [
            s if s.vendor_name else s.merged({"vendor_name": name})
            for s in self.scenarios
        ]

    # ------------------------------------------------------------------
    # Scenarios
    # ------------------------------------------------------------------

    def find_scenario(self, scenario_id: str) -> Optional[Scenario]:
        return next(
            (s for s in self.scenarios if s.scenario_id == scenario_id), None
        )

    def add_scenario(self) -> Scenario:
        """Append a new scenario pre-filled with the current vendor name."""
        scenario = new_scenario(vendor_name=self.vendor.vendor_name)
        self.scenarios.append(scenario)
        return scenario

    def update_scenario(
        self, scenario_id: str, patch: dict[str, Any]
    ) -> Optional[Scenario]:
        """Merge narrative fields into a scenario."""
        for index, scenario in enumerate(self.scenarios):
            if scenario.scenario_id == scenario_id:
                self.scenarios[index] = scenario.merged(patch)
                return self.scenarios[index]
        return None

    def remove_scenario(self, scenario_id: str) -> bool:
        """
        Remove a scenario and everything that belongs to it.

        Input set, result set, treatments and decision for the scenario are
        removed in the same call so no orphaned records remain.

        Returns:
            True if the scenario existed
        """
        existed = self.find_scenario(scenario_id) is not None

        self.scenarios = [s for s in self.scenarios if s.scenario_id != scenario_id]
        self.inputs_by_scenario.pop(scenario_id, None)
        self.results_by_scenario.pop(scenario_id, None)

        treatments_before = len(self.treatments)
        self.treatments = [t for t in self.treatments if t.scenario_id != scenario_id]
        decisions_before = len(self.decisions)
        self.decisions = [d for d in self.decisions if d.scenario_id != scenario_id]

        logger.debug(
            "Removed scenario %s (%d treatments, %d decisions)",
            scenario_id,
            treatments_before - len(self.treatments),
            decisions_before - len(self.decisions),
        )
        return existed

    # ------------------------------------------------------------------
    # FAIR inputs and results
    # ------------------------------------------------------------------

    def get_inputs(self, scenario_id: str) -> InputSet:
        inputs = self.inputs_by_scenario.get(scenario_id)
        return inputs if inputs is not None else empty_inputs(scenario_id)

    def get_results(self, scenario_id: str) -> ResultSet:
        results = self.results_by_scenario.get(scenario_id)
        return results if results is not None else empty_results(scenario_id)

    def upsert_inputs(
        self, scenario_id: str, patch: dict[str, Any]
    ) -> Optional[InputSet]:
        """Create-or-merge the input set of an existing scenario."""
        if self.find_scenario(scenario_id) is None:
            return None
        inputs = self.get_inputs(scenario_id).merged(patch)
        self.inputs_by_scenario[scenario_id] = inputs
        return inputs

    def upsert_results(
        self, scenario_id: str, patch: dict[str, Any]
    ) -> Optional[ResultSet]:
        """Create-or-merge the result set of an existing scenario."""
        if self.find_scenario(scenario_id) is None:
            return None
        results = self.get_results(scenario_id).merged(patch)
        self.results_by_scenario[scenario_id] = results
        return results

    # ------------------------------------------------------------------
    # Treatments
    # ------------------------------------------------------------------

    def treatments_for(self, scenario_id: str) -> list[Treatment]:
        return [t for t in self.treatments if t.scenario_id == scenario_id]

    def add_treatment(self, scenario_id: str) -> Optional[Treatment]:
        if self.find_scenario(scenario_id) is None:
            return None
        treatment = new_treatment(scenario_id)
        self.treatments.append(treatment)
        return treatment

    def update_treatment(
        self, treatment_id: str, patch: dict[str, Any]
    ) -> Optional[Treatment]:
        for index, treatment in enumerate(self.treatments):
            if treatment.id == treatment_id:
                self.treatments[index] = treatment.merged(patch)
                return self.treatments[index]
        return None

    def remove_treatment(self, treatment_id: str) -> bool:
        before = len(self.treatments)
        self.treatments = [t for t in self.treatments if t.id != treatment_id]
        return len(self.treatments) < before

    # ------------------------------------------------------------------
    # Decisions
    # ------------------------------------------------------------------

    def decision_for(self, scenario_id: str) -> Optional[Decision]:
        return next(
            (d for d in self.decisions if d.scenario_id == scenario_id), None
        )

    def add_decision(self, scenario_id: str) -> Optional[Decision]:
        """
        Record a decision for a scenario.

        One decision per scenario: if one already exists it is returned
        unchanged and nothing is added.
        """
        if self.find_scenario(scenario_id) is None:
            return None
        existing = self.decision_for(scenario_id)
        if existing is not None:
            return existing
        decision = new_decision(scenario_id)
        self.decisions.append(decision)
        return decision

    def update_decision(
        self, decision_id: str, patch: dict[str, Any]
    ) -> Optional[Decision]:
        for index, decision in enumerate(self.decisions):
            if decision.id == decision_id:
                self.decisions[index] = decision.merged(patch)
                return self.decisions[index]
        return None

    # ------------------------------------------------------------------
    # Step views
    # ------------------------------------------------------------------

    def can_continue(self, step: int) -> bool:
        """Whether the wizard may advance past ``step``."""
        _check_step(step)
        if step == 1:
            return bool(self.vendor.vendor_name.strip())
        if step == 2:
            return len(self.scenarios) > 0
        return step < TOTAL_STEPS

    def step_view(self, step: int) -> dict[str, Any]:
        """Slice of state a wizard step reads from."""
        _check_step(step)
        if step == 1:
            return {"vendor": self.vendor}
        if step == 2:
            return {"scenarios": list(self.scenarios)}
        if step == 3:
            return {
                "scenarios": list(self.scenarios),
                "inputs": [self.get_inputs(s.scenario_id) for s in self.scenarios],
            }
        if step == 4:
            return {
                "scenarios": list(self.scenarios),
                "results": [self.get_results(s.scenario_id) for s in self.scenarios],
            }
        if step == 5:
            return {"scenarios": list(self.scenarios), "treatments": list(self.treatments)}
        return {"scenarios": list(self.scenarios), "decisions": list(self.decisions)}

    def snapshot(self) -> WizardSnapshot:
        """Deep copy of the current state."""
        return WizardSnapshot(
            vendor=self.vendor,
            scenarios=self.scenarios,
            inputs_by_scenario=self.inputs_by_scenario,
            results_by_scenario=self.results_by_scenario,
            treatments=self.treatments,
            decisions=self.decisions,
        ).model_copy(deep=True)


def _check_step(step: int) -> None:
    if not 1 <= step <= TOTAL_STEPS:
        raise ValueError(f"Invalid wizard step: {step}")
