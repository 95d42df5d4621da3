from __future__ import annotations

import itertools
from threading import Lock

import structlog

from customer_server.config import get_settings
from customer_server.models.schemas import Customer

logger = structlog.get_logger(__name__)

SEED_CUSTOMERS: tuple[tuple[str, str, bool], ...] = (
    ("Bill Smith", "123 Main St", False),
    ("Jane Jackson", "1245 Birch Ave", True),
    ("Steve Stillwell", "433 Peach Lane", True),
    ("Mary McKenna", "3454 Apple St", False),
)

# Ids are unique per process, not per store.
_id_lock = Lock()
_ids = itertools.count(1)


def next_customer_id() -> int:
    with _id_lock:
        return next(_ids)


def reset_customer_ids() -> None:
    """Restart id assignment at 1 (used by tests)."""

    global _ids
    with _id_lock:
        _ids = itertools.count(1)


class CustomerStore:
    """Thread-safe, insertion-ordered customer records (resets on restart)."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._customers: list[Customer] = []

    def __len__(self) -> int:
        with self._lock:
            return len(self._customers)

    def list(self) -> list[Customer]:
        with self._lock:
            return list(self._customers)

    def find_by_id(self, customer_id: int) -> Customer | None:
        with self._lock:
            for customer in self._customers:
                if customer.id == customer_id:
                    return customer
        return None

    def find_by_name_contains(self, substring: str) -> list[Customer]:
        with self._lock:
            return [c for c in self._customers if substring in c.name]

    def append(self, name: str, address: str, paid: bool) -> Customer:
        with self._lock:
            customer = Customer(name=name, address=address, paid=paid, id=next_customer_id())
            self._customers.append(customer)
        logger.info("customer_added", customer_id=customer.id)
        return customer


def seed_customers(store: CustomerStore) -> CustomerStore:
    for name, address, paid in SEED_CUSTOMERS:
        store.append(name, address, paid)
    return store


def create_store(seed: bool = True) -> CustomerStore:
    store = CustomerStore()
    if seed:
        seed_customers(store)
    return store


_STORE: CustomerStore | None = None
_store_lock = Lock()


def set_store(store: CustomerStore | None) -> None:
    global _STORE
    with _store_lock:
        _STORE = store


def get_store() -> CustomerStore:
    global _STORE
    with _store_lock:
        if _STORE is None:
            _STORE = create_store(seed=get_settings().seed_customers)
        return _STORE
