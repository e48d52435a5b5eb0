from __future__ import annotations

from datetime import date
from uuid import uuid4

import pytest

from src.application.errors import (
    ConflictError,
    InvalidStateError,
    NotFoundError,
    PartialFailure,
    PreconditionError,
    StorageError,
    ValidationError,
)
from src.application.use_cases.breeding import (
    add_ewe,
    assign_ram,
    confirm_heat,
    create_plan,
    delete_plan,
    discard_ewe,
    list_available_ewes,
    move_ewe,
    record_cycle_result,
    remove_ewe,
    update_plan,
)
from src.domain.models.breeding_plan import CycleResult

START = date(2024, 3, 1)


async def new_plan(uow, name="estação", ewe_ids=None, **kwargs):
    result = await create_plan.execute(
        uow,
        create_plan.CreatePlanInput(
            name=name, start_date=START, initial_ewe_ids=list(ewe_ids or []), **kwargs
        ),
    )
    return result.plan


async def test_create_plan_allows_empty_list(uow):
    plan = await new_plan(uow)
    assert plan.ewes == []
    assert plan.name == "ESTAÇÃO"


async def test_create_plan_rejects_blank_name(uow):
    with pytest.raises(ValidationError):
        await new_plan(uow, name="   ")


async def test_create_plan_rejects_male(uow, add_sheep):
    ram = await add_sheep("R1", sex="MALE")
    with pytest.raises(ValidationError):
        await new_plan(uow, ewe_ids=[ram.id])


async def test_create_plan_flags_duplicate_active_name(uow):
    await new_plan(uow, name="lote a")
    result = await create_plan.execute(
        uow, create_plan.CreatePlanInput(name="LOTE  A", start_date=START)
    )
    assert result.duplicate_name


async def test_ewe_cannot_join_two_plans(uow, add_sheep):
    ewe = await add_sheep("001")
    first = await new_plan(uow, ewe_ids=[ewe.id])
    second = await new_plan(uow, name="outra")
    with pytest.raises(ConflictError):
        await add_ewe.execute(uow, second.id, ewe.id)
    with pytest.raises(ConflictError):
        await new_plan(uow, name="terceira", ewe_ids=[ewe.id])
    assert [p.id for p in await uow.breeding_plans.list() if p.find_ewe(ewe.id)] == [first.id]


async def test_available_ewes_hides_enrolled(uow, add_sheep):
    enrolled = await add_sheep("001")
    free = await add_sheep("002")
    await new_plan(uow, ewe_ids=[enrolled.id])
    available = await list_available_ewes.execute(uow)
    assert [s.id for s in available] == [free.id]


async def test_full_cycle_to_pregnancy(uow, add_sheep):
    ewe = await add_sheep("001")
    ram = await add_sheep("R1", sex="MALE")
    plan = await new_plan(uow, ewe_ids=[ewe.id])

    with pytest.raises(InvalidStateError):
        await assign_ram.execute(uow, plan.id, ewe.id, ram.id, today=START)

    await confirm_heat.execute(uow, plan.id, ewe.id, True, today=START)
    plan = await assign_ram.execute(uow, plan.id, ewe.id, ram.id, today=START)
    entry = plan.find_ewe(ewe.id)
    assert entry.heat_date == START
    assert entry.first_mating_date == START

    plan = await record_cycle_result.execute(uow, plan.id, ewe.id, 1, CycleResult.PREGNANT.value)
    assert plan.find_ewe(ewe.id).finalized
    sheep = await uow.sheep.get(ewe.id)
    assert sheep.pregnant
    assert sheep.sire_id == ram.id

    with pytest.raises(InvalidStateError):
        await confirm_heat.execute(uow, plan.id, ewe.id, False)


async def test_assign_ram_requires_a_male(uow, add_sheep):
    ewe = await add_sheep("001")
    other = await add_sheep("002")
    plan = await new_plan(uow, ewe_ids=[ewe.id])
    await confirm_heat.execute(uow, plan.id, ewe.id, True, today=START)
    with pytest.raises(ValidationError):
        await assign_ram.execute(uow, plan.id, ewe.id, other.id, today=START)


async def test_pregnant_falls_back_to_plan_sire(uow, add_sheep):
    ewe = await add_sheep("001")
    ram = await add_sheep("R1", sex="MALE")
    plan = await new_plan(uow, ewe_ids=[ewe.id], sire_id=ram.id)
    await record_cycle_result.execute(uow, plan.id, ewe.id, 1, CycleResult.PREGNANT.value)
    assert (await uow.sheep.get(ewe.id)).sire_id == ram.id


async def test_cycles_open_in_order(uow, add_sheep):
    ewe = await add_sheep("001")
    plan = await new_plan(uow, ewe_ids=[ewe.id])
    with pytest.raises(InvalidStateError):
        await record_cycle_result.execute(uow, plan.id, ewe.id, 2, CycleResult.EMPTY.value)

    await record_cycle_result.execute(uow, plan.id, ewe.id, 1, CycleResult.EMPTY.value)
    with pytest.raises(InvalidStateError):
        await record_cycle_result.execute(uow, plan.id, ewe.id, 1, CycleResult.PREGNANT.value)
    plan = await record_cycle_result.execute(uow, plan.id, ewe.id, 2, CycleResult.EMPTY.value)
    assert not plan.find_ewe(ewe.id).finalized
    plan = await record_cycle_result.execute(uow, plan.id, ewe.id, 3, CycleResult.EMPTY.value)
    entry = plan.find_ewe(ewe.id)
    assert entry.finalized
    assert entry.is_exhausted
    assert not (await uow.sheep.get(ewe.id)).pregnant


async def test_record_result_validates_input(uow, add_sheep):
    ewe = await add_sheep("001")
    plan = await new_plan(uow, ewe_ids=[ewe.id])
    with pytest.raises(ValidationError):
        await record_cycle_result.execute(uow, plan.id, ewe.id, 4, CycleResult.EMPTY.value)
    with pytest.raises(ValidationError):
        await record_cycle_result.execute(uow, plan.id, ewe.id, 1, CycleResult.PENDING.value)


async def test_remove_ewe_twice(uow, add_sheep):
    ewe = await add_sheep("001")
    plan = await new_plan(uow, ewe_ids=[ewe.id])
    await remove_ewe.execute(uow, plan.id, ewe.id)
    version_after_first = (await uow.sheep.get(ewe.id)).version

    with pytest.raises(NotFoundError):
        await remove_ewe.execute(uow, plan.id, ewe.id)
    assert (await uow.sheep.get(ewe.id)).version == version_after_first


async def test_move_ewe_resets_cycle(uow, add_sheep):
    ewe = await add_sheep("001")
    source = await new_plan(uow, name="origem", ewe_ids=[ewe.id])
    target = await new_plan(uow, name="destino")
    await confirm_heat.execute(uow, source.id, ewe.id, True, today=START)
    await record_cycle_result.execute(uow, source.id, ewe.id, 1, CycleResult.EMPTY.value)

    moved = await move_ewe.execute(uow, source.id, target.id, ewe.id)
    entry = moved.find_ewe(ewe.id)
    assert entry.attempt_number == 1
    assert not entry.heat_detected
    assert set(entry.results.values()) == {CycleResult.PENDING.value}
    assert (await uow.breeding_plans.get(source.id)).find_ewe(ewe.id) is None


async def test_move_ewe_is_idempotent(uow, add_sheep):
    ewe = await add_sheep("001")
    source = await new_plan(uow, name="origem", ewe_ids=[ewe.id])
    target = await new_plan(uow, name="destino")
    await move_ewe.execute(uow, source.id, target.id, ewe.id)
    again = await move_ewe.execute(uow, source.id, target.id, ewe.id)
    assert again.find_ewe(ewe.id) is not None


async def test_move_ewe_to_same_plan_is_rejected(uow, add_sheep):
    ewe = await add_sheep("001")
    plan = await new_plan(uow, ewe_ids=[ewe.id])
    with pytest.raises(ValidationError):
        await move_ewe.execute(uow, plan.id, plan.id, ewe.id)


async def test_move_ewe_reports_partial_failure(uow, add_sheep, local_store, monkeypatch):
    ewe = await add_sheep("001")
    source = await new_plan(uow, name="origem", ewe_ids=[ewe.id])
    target = await new_plan(uow, name="destino")

    real_write = local_store.write
    calls = {"n": 0}

    def flaky_write(data):
        calls["n"] += 1
        if calls["n"] > 1:
            raise StorageError("disk full")
        real_write(data)

    monkeypatch.setattr(local_store, "write", flaky_write)
    with pytest.raises(PartialFailure) as exc_info:
        await move_ewe.execute(uow, source.id, target.id, ewe.id)
    assert exc_info.value.details["source_removed"] is True
    assert exc_info.value.details["target_inserted"] is False

    # Retrying completes the move
    monkeypatch.setattr(local_store, "write", real_write)
    moved = await move_ewe.execute(uow, source.id, target.id, ewe.id)
    assert moved.find_ewe(ewe.id) is not None


async def test_move_rejects_ineligible_animal_outside_any_plan(uow, add_sheep):
    ram = await add_sheep("R1", sex="MALE")
    carrying = await add_sheep("002", pregnant=True)
    source = await new_plan(uow, name="origem")
    target = await new_plan(uow, name="destino")

    with pytest.raises(ValidationError):
        await move_ewe.execute(uow, source.id, target.id, ram.id)
    with pytest.raises(ValidationError):
        await move_ewe.execute(uow, source.id, target.id, carrying.id)
    assert (await uow.breeding_plans.get(target.id)).ewes == []


async def test_pregnant_result_can_be_retried_after_sheep_write_fails(
    uow, add_sheep, monkeypatch
):
    ewe = await add_sheep("001")
    ram = await add_sheep("R1", sex="MALE")
    plan = await new_plan(uow, ewe_ids=[ewe.id], sire_id=ram.id)

    async def failing_update(*args, **kwargs):
        raise StorageError("disk full")

    with monkeypatch.context() as patched:
        patched.setattr(uow.sheep, "update", failing_update)
        with pytest.raises(StorageError):
            await record_cycle_result.execute(
                uow, plan.id, ewe.id, 1, CycleResult.PREGNANT.value
            )
    assert not (await uow.breeding_plans.get(plan.id)).find_ewe(ewe.id).finalized

    plan = await record_cycle_result.execute(uow, plan.id, ewe.id, 1, CycleResult.PREGNANT.value)
    assert plan.find_ewe(ewe.id).finalized
    sheep = await uow.sheep.get(ewe.id)
    assert sheep.pregnant
    assert sheep.sire_id == ram.id


async def test_remove_ewe_can_be_retried_after_sheep_write_fails(uow, add_sheep, monkeypatch):
    ewe = await add_sheep("001")
    ram = await add_sheep("R1", sex="MALE")
    plan = await new_plan(uow, ewe_ids=[ewe.id], sire_id=ram.id)
    await record_cycle_result.execute(uow, plan.id, ewe.id, 1, CycleResult.PREGNANT.value)

    async def failing_update(*args, **kwargs):
        raise StorageError("disk full")

    with monkeypatch.context() as patched:
        patched.setattr(uow.sheep, "update", failing_update)
        with pytest.raises(StorageError):
            await remove_ewe.execute(uow, plan.id, ewe.id)
    assert (await uow.breeding_plans.get(plan.id)).find_ewe(ewe.id) is not None

    await remove_ewe.execute(uow, plan.id, ewe.id)
    sheep = await uow.sheep.get(ewe.id)
    assert not sheep.pregnant
    assert sheep.sire_id is None


async def test_missing_sheep_record_leaves_plan_untouched(uow, add_sheep, local_store):
    ewe = await add_sheep("001")
    plan = await new_plan(uow, ewe_ids=[ewe.id])
    await local_store.remove("sheep", str(ewe.id))

    with pytest.raises(NotFoundError):
        await record_cycle_result.execute(uow, plan.id, ewe.id, 1, CycleResult.PREGNANT.value)
    with pytest.raises(NotFoundError):
        await remove_ewe.execute(uow, plan.id, ewe.id)

    stored = await uow.breeding_plans.get(plan.id)
    assert stored.version == plan.version
    entry = stored.find_ewe(ewe.id)
    assert entry is not None
    assert not entry.finalized


async def test_discard_ewe_culls_and_keeps_history(uow, add_sheep):
    ewe = await add_sheep("001")
    plan = await new_plan(uow, ewe_ids=[ewe.id])
    culled = await discard_ewe.execute(uow, plan.id, ewe.id)
    assert culled.status == "CULLED"
    assert (await uow.breeding_plans.get(plan.id)).find_ewe(ewe.id) is not None


async def test_delete_plan_requires_empty_plan(uow, add_sheep):
    ewe = await add_sheep("001")
    plan = await new_plan(uow, ewe_ids=[ewe.id])
    with pytest.raises(PreconditionError):
        await delete_plan.execute(uow, plan.id)
    await remove_ewe.execute(uow, plan.id, ewe.id)
    await delete_plan.execute(uow, plan.id)
    assert await uow.breeding_plans.get(plan.id) is None


async def test_update_plan_detects_stale_version(uow):
    plan = await new_plan(uow)
    stale = await uow.breeding_plans.get(plan.id)
    await update_plan.execute(uow, plan.id, update_plan.UpdatePlanInput(status="COMPLETED"))
    stale.bump_version()
    assert await uow.breeding_plans.update(stale, expected_version=stale.version - 1) is None


async def test_unknown_plan(uow):
    with pytest.raises(NotFoundError):
        await add_ewe.execute(uow, uuid4(), uuid4())
