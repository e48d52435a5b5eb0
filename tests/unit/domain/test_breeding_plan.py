from __future__ import annotations

from datetime import date
from uuid import uuid4

from src.domain.models.breeding_plan import (
    BreedingPlan,
    BreedingPlanEwe,
    BreedingPlanStatus,
    CycleResult,
    normalize_plan_name,
    summarize,
)
from src.domain.models.sheep import Sheep
from src.domain.services.breeding_calendar import SeasonPhase, breeding_alerts, season_status
from src.domain.services.eligibility import available_ewes


def test_create_plan_starts_entries_fresh():
    ewe_ids = [uuid4(), uuid4()]
    plan = BreedingPlan.create(name="  estação   2024 ", start_date=date(2024, 3, 1), ewe_ids=ewe_ids)
    assert plan.name == "ESTAÇÃO 2024"
    assert plan.status == BreedingPlanStatus.BREEDING.value
    assert [e.ewe_id for e in plan.ewes] == ewe_ids
    for entry in plan.ewes:
        assert entry.attempt_number == 1
        assert not entry.finalized
        assert not entry.heat_detected
        assert set(entry.results.values()) == {CycleResult.PENDING.value}


def test_sync_date_puts_plan_in_synchronization():
    plan = BreedingPlan.create(name="iatf", start_date=date(2024, 3, 1), sync_date=date(2024, 2, 20))
    assert plan.status == BreedingPlanStatus.SYNCHRONIZING.value


def test_empty_results_open_following_cycles():
    entry = BreedingPlanEwe.fresh(uuid4())
    assert not entry.can_open_cycle(2)
    entry.record_result(1, CycleResult.EMPTY.value)
    assert not entry.finalized
    assert entry.attempt_number == 2
    assert entry.can_open_cycle(2)
    entry.record_result(2, CycleResult.EMPTY.value)
    assert not entry.finalized
    entry.record_result(3, CycleResult.EMPTY.value)
    assert entry.finalized
    assert entry.is_exhausted


def test_pregnant_result_finalizes():
    entry = BreedingPlanEwe.fresh(uuid4())
    entry.record_result(1, CycleResult.PREGNANT.value)
    assert entry.finalized
    assert entry.is_pregnant
    assert not entry.is_exhausted


def test_reverting_heat_clears_ram():
    entry = BreedingPlanEwe.fresh(uuid4())
    entry.set_heat(True, date(2024, 3, 2))
    entry.assign_ram(uuid4(), date(2024, 3, 2))
    entry.set_heat(False, None)
    assert entry.heat_date is None
    assert entry.sire_id is None
    assert entry.first_mating_date is None


def test_summary_counts():
    plan = BreedingPlan.create(name="p", start_date=date(2024, 3, 1), ewe_ids=[uuid4(), uuid4()])
    plan.ewes[0].record_result(1, CycleResult.PREGNANT.value)
    summary = summarize(plan)
    assert (summary.members, summary.pregnant, summary.pending) == (2, 1, 1)


def test_normalize_plan_name():
    assert normalize_plan_name(" lote\tA  ") == "LOTE A"


def test_available_ewes_excludes_enrolled_pregnant_and_males():
    enrolled = Sheep.create(tag="001", sex="FEMALE")
    free = Sheep.create(tag="002", sex="FEMALE")
    pregnant = Sheep.create(tag="003", sex="FEMALE", pregnant=True)
    culled = Sheep.create(tag="004", sex="FEMALE", status="CULLED")
    ram = Sheep.create(tag="005", sex="MALE")
    plan = BreedingPlan.create(name="p", start_date=date(2024, 3, 1), ewe_ids=[enrolled.id])
    result = available_ewes([enrolled, free, pregnant, culled, ram], [plan])
    assert [s.tag for s in result] == ["002"]


def test_season_phases():
    plan = BreedingPlan.create(name="p", start_date=date(2024, 1, 1))
    before = season_status(plan, date(2023, 12, 30))
    assert before.phase == SeasonPhase.NOT_STARTED
    assert before.countdown_days == 2

    ram_in = season_status(plan, date(2024, 1, 2))
    assert (ram_in.phase, ram_in.cycle, ram_in.countdown_days) == (SeasonPhase.RAM_IN, 1, 2)

    ram_out = season_status(plan, date(2024, 1, 10))
    assert (ram_out.phase, ram_out.cycle, ram_out.countdown_days) == (SeasonPhase.RAM_OUT, 2, 8)

    assert season_status(plan, date(2024, 2, 20)).phase == SeasonPhase.FINISHED


def test_alerts_skip_completed_plans():
    active = BreedingPlan.create(name="a", start_date=date(2024, 1, 1))
    done = BreedingPlan.create(name="b", start_date=date(2024, 1, 1))
    done.status = BreedingPlanStatus.COMPLETED.value
    alerts = breeding_alerts([active, done], date(2024, 1, 1))
    assert [a.plan_id for a in alerts] == [active.id]
