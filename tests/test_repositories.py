from datetime import date

import pytest

from playschool.models.batch import BatchOut
from playschool.models.fee import FeeInvoiceOut, FeeStatus, FeeType
from playschool.repositories import MemoryRepository, safe_object_id

pytestmark = pytest.mark.anyio


async def test_insert_assigns_id_and_get_returns_copy():
    repo = MemoryRepository(BatchOut)
    created = await repo.insert({"name": "UKG", "fee_amount": 20000})

    assert len(created.id) == 24
    fetched = await repo.get(created.id)
    fetched.fee_amount = 1
    assert (await repo.get(created.id)).fee_amount == 20000


async def test_find_filters_on_every_field():
    repo = MemoryRepository(FeeInvoiceOut)
    for student_id, status in [("s1", FeeStatus.PAID), ("s1", FeeStatus.PENDING), ("s2", FeeStatus.PAID)]:
        await repo.insert(
            {"student_id": student_id, "title": "Uniform", "amount": 500, "due_date": date(2024, 4, 1),
             "status": status, "type": FeeType.OTHER}
        )

    assert len(await repo.find()) == 3
    assert len(await repo.find(student_id="s1")) == 2
    assert len(await repo.find(student_id="s1", status=FeeStatus.PAID)) == 1
    assert await repo.find_one(student_id="s3") is None


async def test_update_and_delete():
    repo = MemoryRepository(BatchOut, [BatchOut(id="b1", name="LKG", fee_amount=18000)])

    updated = await repo.update("b1", {"fee_amount": 19000})
    assert updated.fee_amount == 19000
    assert updated.name == "LKG"
    assert await repo.update("missing", {"fee_amount": 1}) is None

    assert await repo.delete("b1") is True
    assert await repo.delete("b1") is False


def test_safe_object_id():
    assert safe_object_id("650000000000000000000001") is not None
    assert safe_object_id("not-an-id") is None
    assert safe_object_id(None) is None
