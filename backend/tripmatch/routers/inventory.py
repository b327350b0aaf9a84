"""Inventory router — the experiences search results refer to by id."""

from fastapi import APIRouter

from tripmatch.data.inventory import inventory

router = APIRouter()


@router.get("")
async def list_inventory():
    return {"items": inventory.to_json_list()}
