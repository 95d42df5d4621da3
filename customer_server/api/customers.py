from __future__ import annotations

import re

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from customer_server.models.schemas import Customer
from customer_server.store.memory import CustomerStore, get_store

router = APIRouter(tags=["customers"])

# Never issued, so a malformed id simply finds nothing.
_UNKNOWN_ID = -1
_ID_PATTERN = re.compile(r"[+-]?[0-9]+", re.ASCII)
_MIN_ID, _MAX_ID = -(2**31), 2**31 - 1


def _parse_id(raw: str) -> int:
    # int() alone would accept "0_1", " 1" and non-ASCII digits.
    if _ID_PATTERN.fullmatch(raw) is None:
        return _UNKNOWN_ID
    value = int(raw)
    if not _MIN_ID <= value <= _MAX_ID:
        return _UNKNOWN_ID
    return value


def _parse_paid(raw: object) -> bool:
    return isinstance(raw, str) and raw.lower() == "true"


@router.get("/customers", response_model=list[Customer])
async def list_customers(store: CustomerStore = Depends(get_store)) -> list[Customer]:
    return store.list()


@router.get("/customers/{customer_id}", response_model=Customer)
async def get_customer(customer_id: str, store: CustomerStore = Depends(get_store)) -> Customer:
    customer = store.find_by_id(_parse_id(customer_id))
    if customer is None:
        raise HTTPException(status_code=404, detail="Customer not found")
    return customer


@router.get("/customer_query", response_model=list[Customer])
async def query_customers(
    name: str | None = Query(default=None),
    store: CustomerStore = Depends(get_store),
) -> list[Customer]:
    if name is None:
        raise HTTPException(status_code=400, detail="Missing name")
    return store.find_by_name_contains(name)


@router.post("/customers", response_model=Customer)
async def create_customer(request: Request, store: CustomerStore = Depends(get_store)) -> Customer:
    # Read the raw form: an empty "name=" is present, only an absent field is rejected.
    form = await request.form()
    name = form.get("name")
    if not isinstance(name, str):
        raise HTTPException(status_code=400, detail="Missing name")
    address = form.get("address")
    return store.append(
        name=name,
        address=address if isinstance(address, str) else "",
        paid=_parse_paid(form.get("paid")),
    )
