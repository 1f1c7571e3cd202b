import pytest

from tprm_wizard.services.wizard_store import WizardStore


def test_new_store_is_seeded_with_one_scenario():
    store = WizardStore()
    assert len(store.scenarios) == 1
    assert store.scenarios[0].vendor_name == ""


def test_vendor_name_fills_blank_scenarios(store):
    scenario = store.add_scenario()
    store.set_vendor_field({"vendor_name": "Acme"})

    assert store.find_scenario(scenario.scenario_id).vendor_name == "Acme"
    assert store.vendor.vendor_name == "Acme"


def test_vendor_name_does_not_overwrite_custom_scenario_name(store):
    store.set_vendor_field({"vendor_name": "Acme"})
    scenario = store.add_scenario()
    assert scenario.vendor_name == "Acme"

    store.update_scenario(scenario.scenario_id, {"vendor_name": "CustomName"})
    store.set_vendor_field({"vendor_name": "Acme2"})

    assert store.find_scenario(scenario.scenario_id).vendor_name == "CustomName"


def test_vendor_name_propagation_is_a_one_time_fill(store):
    first = store.add_scenario()
    store.set_vendor_field({"vendor_name": "Acme"})
    second = store.add_scenario()
    store.update_scenario(second.scenario_id, {"vendor_name": ""})

    store.set_vendor_field({"vendor_name": "Acme Holdings"})

    # first was filled with "Acme" and keeps it; second was blank again
    assert store.find_scenario(first.scenario_id).vendor_name == "Acme"
    assert store.find_scenario(second.scenario_id).vendor_name == "Acme Holdings"


def test_other_vendor_fields_do_not_touch_scenarios(store):
    scenario = store.add_scenario()
    store.set_vendor_field({"business_owner": "Head of Sales"})

    assert store.vendor.business_owner == "Head of Sales"
    assert store.find_scenario(scenario.scenario_id).vendor_name == ""


def test_vendor_id_cannot_be_patched(store):
    vendor_id = store.vendor.vendor_id
    store.set_vendor_field({"vendor_id": "V-hijack", "category": "MSP"})

    assert store.vendor.vendor_id == vendor_id
    assert store.vendor.category == "MSP"


def test_add_scenario_appends_in_order(store):
    ids = [store.add_scenario().scenario_id for _ in range(3)]
    assert [s.scenario_id for s in store.scenarios] == ids
    assert len(set(ids)) == 3


def test_update_unknown_scenario_returns_none(store):
    assert store.update_scenario("S-missing", {"loss_event": "x"}) is None


def test_remove_scenario_cascades_only_its_own_records(store):
    s1 = store.add_scenario()
    s2 = store.add_scenario()
    for s in (s1, s2):
        store.upsert_inputs(s.scenario_id, {"tef_low": "1"})
        store.upsert_results(s.scenario_id, {"p90": "100"})
        store.add_treatment(s.scenario_id)
        store.add_treatment(s.scenario_id)
        store.add_decision(s.scenario_id)

    assert store.remove_scenario(s1.scenario_id) is True

    assert [s.scenario_id for s in store.scenarios] == [s2.scenario_id]
    assert list(store.inputs_by_scenario) == [s2.scenario_id]
    assert list(store.results_by_scenario) == [s2.scenario_id]
    assert {t.scenario_id for t in store.treatments} == {s2.scenario_id}
    assert len(store.treatments) == 2
    assert [d.scenario_id for d in store.decisions] == [s2.scenario_id]


def test_remove_unknown_scenario_reports_false(store):
    store.add_scenario()
    assert store.remove_scenario("S-missing") is False
    assert len(store.scenarios) == 1


def test_inputs_default_before_first_edit(store):
    scenario = store.add_scenario()
    inputs = store.get_inputs(scenario.scenario_id)

    assert inputs.scenario_id == scenario.scenario_id
    assert inputs.tef_low == ""
    assert scenario.scenario_id not in store.inputs_by_scenario


def test_upsert_inputs_merges_on_top_of_default(store):
    scenario = store.add_scenario()
    store.upsert_inputs(scenario.scenario_id, {"tef_low": "1"})
    inputs = store.upsert_inputs(scenario.scenario_id, {"tef_high": "6"})

    assert inputs.tef_low == "1"
    assert inputs.tef_high == "6"
    assert inputs.assumptions == ""
    assert store.get_inputs(scenario.scenario_id) == inputs


def test_upsert_results_stores_text_verbatim(store):
    scenario = store.add_scenario()
    results = store.upsert_results(
        scenario.scenario_id, {"expected_annual_loss": "approx. 420k", "p95": "-3"}
    )

    assert results.expected_annual_loss == "approx. 420k"
    assert results.p95 == "-3"


def test_child_records_require_an_existing_scenario(store):
    assert store.upsert_inputs("S-missing", {"tef_low": "1"}) is None
    assert store.upsert_results("S-missing", {"p90": "1"}) is None
    assert store.add_treatment("S-missing") is None
    assert store.add_decision("S-missing") is None

    assert store.inputs_by_scenario == {}
    assert store.results_by_scenario == {}
    assert store.treatments == []
    assert store.decisions == []


def test_treatments_are_unbounded_and_removable_by_id(store):
    s1 = store.add_scenario()
    first = store.add_treatment(s1.scenario_id)
    second = store.add_treatment(s1.scenario_id)

    assert first.id != second.id
    assert store.remove_treatment(first.id) is True
    assert store.treatments_for(s1.scenario_id) == [second]
    assert store.remove_treatment(first.id) is False


def test_update_treatment_by_id(store):
    scenario = store.add_scenario()
    treatment = store.add_treatment(scenario.scenario_id)
    updated = store.update_treatment(
        treatment.id, {"control": "Enforce MFA for vendor admins", "annual_cost": "40000"}
    )

    assert updated.control == "Enforce MFA for vendor admins"
    assert updated.annual_cost == "40000"
    assert updated.scenario_id == scenario.scenario_id
    assert store.update_treatment("T-missing", {"control": "x"}) is None


def test_add_decision_is_idempotent(store):
    scenario = store.add_scenario()
    first = store.add_decision(scenario.scenario_id)
    store.update_decision(first.id, {"rationale": "Within appetite"})
    second = store.add_decision(scenario.scenario_id)

    assert len(store.decisions) == 1
    assert second.id == first.id
    assert second.rationale == "Within appetite"


def test_update_decision_by_id(store):
    scenario = store.add_scenario()
    decision = store.add_decision(scenario.scenario_id)
    updated = store.update_decision(
        decision.id, {"decision": "Accept", "approved_by": "CISO"}
    )

    assert updated.decision == "Accept"
    assert updated.approved_by == "CISO"
    assert store.decision_for(scenario.scenario_id) == updated
    assert store.update_decision("D-missing", {"decision": "Avoid"}) is None


def test_can_continue_rules(store):
    assert store.can_continue(1) is False
    store.set_vendor_field({"vendor_name": "   "})
    assert store.can_continue(1) is False
    store.set_vendor_field({"vendor_name": "Acme"})
    assert store.can_continue(1) is True

    assert store.can_continue(2) is False
    store.add_scenario()
    assert store.can_continue(2) is True

    assert store.can_continue(3) is True
    assert store.can_continue(5) is True
    assert store.can_continue(6) is False


def test_step_view_substitutes_default_records(store):
    scenario = store.add_scenario()
    view = store.step_view(3)

    assert view["scenarios"] == [scenario]
    assert view["inputs"][0].scenario_id == scenario.scenario_id
    assert store.step_view(4)["results"][0].p90 == ""


@pytest.mark.parametrize("step", [0, 7])
def test_unknown_step_is_rejected(store, step):
    with pytest.raises(ValueError):
        store.step_view(step)


def test_snapshot_is_detached_from_store(store):
    scenario = store.add_scenario()
    store.upsert_inputs(scenario.scenario_id, {"tef_low": "1"})
    snapshot = store.snapshot()

    store.upsert_inputs(scenario.scenario_id, {"tef_low": "2"})
    store.add_scenario()
    store.scenarios[0].description = "mutated in place"

    assert snapshot.inputs_for(scenario.scenario_id).tef_low == "1"
    assert len(snapshot.scenarios) == 1
    assert snapshot.scenarios[0].description == ""
