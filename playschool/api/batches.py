"""Batches (classes) and their annual fee."""
from fastapi import APIRouter, HTTPException

from playschool.api.deps import AdminOnly
from playschool.models.batch import Batch, BatchCreate, BatchOut, BatchUpdate
from playschool.repositories import DocumentRepository

router = APIRouter()
public_router = APIRouter()

batches = DocumentRepository(Batch, BatchOut)


@public_router.get("/", response_model=list[BatchOut])
async def list_batches():
    found = await batches.find()
    return sorted(found, key=lambda b: b.fee_amount)


@router.post("/", response_model=BatchOut, status_code=201)
async def create_batch(data: BatchCreate, admin: AdminOnly):
    if await batches.find_one(name=data.name):
        raise HTTPException(status_code=400, detail="Batch already exists")
    return await batches.insert(data.model_dump())


@router.put("/{batch_id}", response_model=BatchOut)
async def update_batch(batch_id: str, data: BatchUpdate, admin: AdminOnly):
    changes = data.model_dump(exclude_unset=True)
    if changes.get("name"):
        clash = await batches.find_one(name=changes["name"])
        if clash and clash.id != batch_id:
            raise HTTPException(status_code=400, detail="Batch already exists")
    b = await batches.update(batch_id, changes)
    if not b:
        raise HTTPException(status_code=404, detail="Batch not found")
    return b
