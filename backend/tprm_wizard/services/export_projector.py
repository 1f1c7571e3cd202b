"""Projection of a wizard snapshot into workbook sheets and report sections.

Both projections are pure: they read a snapshot and return plain tables.
Turning those tables into an .xlsx or .pdf artifact is left to the renderer
modules.
"""

import re
from typing import Optional

from pydantic import BaseModel, Field

from tprm_wizard.config import settings
from tprm_wizard.services.wizard_store import WizardSnapshot

VENDOR_SHEET = "Vendor Overview"
SCENARIO_SHEET = "Risk Scenarios"
INPUTS_SHEET = "FAIR Inputs"
RESULTS_SHEET = "FAIR Results"
TREATMENT_SHEET = "Treatment Options"
DECISION_SHEET = "Decision Log"

SHEET_ORDER = (
    VENDOR_SHEET,
    SCENARIO_SHEET,
    INPUTS_SHEET,
    RESULTS_SHEET,
    TREATMENT_SHEET,
    DECISION_SHEET,
)

NO_TREATMENTS_ROW = ["-", "-", "No treatments captured", "", "", ""]
NO_DECISIONS_ROW = ["-", "-", "", "", "", "No decisions captured"]
UNTITLED_SCENARIO = "Scenario"


class SheetTable(BaseModel):
    """A named flat table: one header row plus data rows."""

    name: str
    headers: list[str]
    rows: list[list[str]] = Field(default_factory=list)


class ReportTable(BaseModel):
    """A titled table section in the narrative report."""

    heading: str
    headers: list[str]
    rows: list[list[str]] = Field(default_factory=list)
    placeholder: bool = False


class ReportDocument(BaseModel):
    """Title banner followed by table sections in reading order."""

    title: str
    subtitle: str
    sections: list[ReportTable] = Field(default_factory=list)


def sanitize_filename(name: str, ascii_only: bool = False) -> str:
    """Sanitize a string for use in a filename."""
    if not name:
        return ""
    # Replace spaces with underscores, remove unsafe characters
    flags = re.ASCII if ascii_only else 0
    sanitized = re.sub(r"[^\w\s-]", "", name, flags=flags)
    sanitized = re.sub(r"[\s]+", "_", sanitized.strip())
    return sanitized[:50]


def export_filename(
    prefix: str,
    vendor_name: str,
    extension: str,
    placeholder: Optional[str] = None,
    ascii_only: bool = False,
) -> str:
    """Build ``<prefix>_<vendor>.<extension>`` with a placeholder vendor part."""
    placeholder = placeholder or settings.vendor_name_placeholder
    vendor_part = sanitize_filename(vendor_name, ascii_only) or placeholder
    return f"{prefix}_{vendor_part}.{extension}"


def workbook_filename(snapshot: WizardSnapshot, ascii_only: bool = False) -> str:
    return export_filename(
        settings.workbook_filename_prefix,
        snapshot.vendor.vendor_name,
        "xlsx",
        ascii_only=ascii_only,
    )


def report_filename(snapshot: WizardSnapshot, ascii_only: bool = False) -> str:
    return export_filename(
        settings.report_filename_prefix,
        snapshot.vendor.vendor_name,
        "pdf",
        ascii_only=ascii_only,
    )


# ----------------------------------------------------------------------
# Workbook
# ----------------------------------------------------------------------


def project_workbook(snapshot: WizardSnapshot) -> list[SheetTable]:
    """Six sheets in fixed order, one row per entity."""
    vendor = snapshot.vendor

    vendor_sheet = SheetTable(
        name=VENDOR_SHEET,
        headers=[
            "Vendor ID",
            "Vendor Name",
            "Vendor Category",
            "Business Owner",
            "Critical Business Function",
            "Data Types Accessed",
            "Geographical Scope",
            "Contract Status",
            "Contract Start Date",
            "Contract End Date",
        ],
        rows=[
            [
                vendor.vendor_id,
                vendor.vendor_name,
                vendor.category,
                vendor.business_owner,
                vendor.critical_function,
                vendor.data_types,
                vendor.geography,
                vendor.contract_status,
                vendor.contract_start,
                vendor.contract_end,
            ]
        ],
    )

    scenario_sheet = SheetTable(
        name=SCENARIO_SHEET,
        headers=[
            "Scenario ID",
            "Vendor Name",
            "Asset at Risk",
            "Threat Actor",
            "Threat Event",
            "Loss Event",
            "Primary Loss Types",
            "Secondary Loss Types",
            "Scenario Description",
        ],
        rows=[
            [
                s.scenario_id,
                s.vendor_name,
                s.asset_at_risk,
                s.threat_actor,
                s.threat_event,
                s.loss_event,
                s.primary_loss_types,
                s.secondary_loss_types,
                s.description,
            ]
            for s in snapshot.scenarios
        ],
    )

    input_rows = []
    for s in snapshot.scenarios:
        i = snapshot.inputs_for(s.scenario_id)
        input_rows.append(
            [
                s.scenario_id,
                i.tef_low,
                i.tef_high,
                i.vuln_low,
                i.vuln_high,
                i.lm_primary,
                i.lm_secondary,
                i.assumptions,
            ]
        )
    inputs_sheet = SheetTable(
        name=INPUTS_SHEET,
        headers=[
            "Scenario ID",
            "Threat Event Frequency (Low)",
            "Threat Event Frequency (High)",
            "Susceptibility (Low)",
            "Susceptibility (High)",
            "Loss Magnitude Primary",
            "Loss Magnitude Secondary",
            "Key Assumptions",
        ],
        rows=input_rows,
    )

    result_rows = []
    for s in snapshot.scenarios:
        r = snapshot.results_for(s.scenario_id)
        result_rows.append(
            [s.scenario_id, r.expected_annual_loss, r.p90, r.p95, r.drivers]
        )
    results_sheet = SheetTable(
        name=RESULTS_SHEET,
        headers=[
            "Scenario ID",
            "Expected Annual Loss",
            "90th Percentile",
            "95th Percentile",
            "Key Risk Drivers",
        ],
        rows=result_rows,
    )

    treatment_sheet = SheetTable(
        name=TREATMENT_SHEET,
        headers=[
            "Scenario ID",
            "Proposed Control",
            "Estimated Annual Cost",
            "Estimated Annual Risk Reduction",
            "Residual Risk",
            "Implementation Owner",
        ],
        rows=[
            [
                t.scenario_id,
                t.control,
                t.annual_cost,
                t.annual_risk_reduction,
                t.residual_risk,
                t.owner,
            ]
            for t in snapshot.treatments
        ],
    )

    decision_sheet = SheetTable(
        name=DECISION_SHEET,
        headers=[
            "Scenario ID",
            "Decision",
            "Rationale",
            "Approved By",
            "Decision Date",
            "Next Review Date",
        ],
        rows=[
            [
                d.scenario_id,
                d.decision,
                d.rationale,
                d.approved_by,
                d.decision_date,
                d.next_review,
            ]
            for d in snapshot.decisions
        ],
    )

    return [
        vendor_sheet,
        scenario_sheet,
        inputs_sheet,
        results_sheet,
        treatment_sheet,
        decision_sheet,
    ]


# ----------------------------------------------------------------------
# Report
# ----------------------------------------------------------------------


def scenario_title(snapshot: WizardSnapshot, scenario_id: str) -> str:
    """Display title: loss event, then threat event, then a placeholder."""
    scenario = snapshot.find_scenario(scenario_id)
    if scenario is None:
        return UNTITLED_SCENARIO
    return scenario.loss_event or scenario.threat_event or UNTITLED_SCENARIO


def project_report(
    snapshot: WizardSnapshot, title: Optional[str] = None
) -> ReportDocument:
    """Banner plus vendor, metrics, treatment and decision sections."""
    vendor = snapshot.vendor
    subtitle = (
        f"Vendor: {vendor.vendor_name}"
        if vendor.vendor_name
        else settings.vendor_name_placeholder
    )
    contract_dates = f"{vendor.contract_start} to {vendor.contract_end}".strip()

    overview = ReportTable(
        heading="1. Vendor Overview",
        headers=["Field", "Value"],
        rows=[
            ["Vendor Category", vendor.category],
            ["Business Owner", vendor.business_owner],
            ["Critical Function", vendor.critical_function],
            ["Data Types", vendor.data_types],
            ["Geography", vendor.geography],
            ["Contract Status", vendor.contract_status],
            ["Contract Dates", contract_dates],
        ],
    )

    metric_rows = []
    for s in snapshot.scenarios:
        r = snapshot.results_for(s.scenario_id)
        metric_rows.append(
            [
                s.scenario_id,
                scenario_title(snapshot, s.scenario_id),
                r.expected_annual_loss,
                r.p90,
                r.p95,
            ]
        )
    metrics = ReportTable(
        heading="2. Key Metrics and Insights",
        headers=["Scenario", "Title", "Expected Loss", "P90", "P95"],
        rows=metric_rows,
    )

    treatment_rows = []
    for t in snapshot.treatments:
        parent = snapshot.find_scenario(t.scenario_id)
        treatment_rows.append(
            [
                t.scenario_id,
                parent.loss_event if parent else "",
                t.control,
                t.annual_cost,
                t.annual_risk_reduction,
                t.residual_risk,
            ]
        )
    treatments = ReportTable(
        heading="3. Treatment Recommendations",
        headers=[
            "Scenario",
            "Scenario Title",
            "Control",
            "Cost",
            "Risk Reduction",
            "Residual Risk",
        ],
        rows=treatment_rows or [list(NO_TREATMENTS_ROW)],
        placeholder=not treatment_rows,
    )

    decision_rows = [
        [
            d.scenario_id,
            d.decision,
            d.approved_by,
            d.decision_date,
            d.next_review,
            d.rationale,
        ]
        for d in snapshot.decisions
    ]
    decisions = ReportTable(
        heading="4. Decision Log",
        headers=[
            "Scenario",
            "Decision",
            "Approved By",
            "Decision Date",
            "Next Review",
            "Rationale",
        ],
        rows=decision_rows or [list(NO_DECISIONS_ROW)],
        placeholder=not decision_rows,
    )

    return ReportDocument(
        title=title or settings.report_title,
        subtitle=subtitle,
        sections=[overview, metrics, treatments, decisions],
    )
