"""HTTP client for the customer service, plus a lookup-by-name command.

Usage::

    customer-by-name --name Smith --url http://localhost:8080
"""

from __future__ import annotations

import argparse

import httpx

from customer_server.models.schemas import Customer

DEFAULT_URL = "http://localhost:8080"


class CustomerClient:
    def __init__(self, base_url: str = DEFAULT_URL, http: httpx.Client | None = None) -> None:
        self._http = http or httpx.Client(base_url=base_url, timeout=10.0)

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "CustomerClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def list_customers(self) -> list[Customer]:
        resp = self._http.get("/customers")
        resp.raise_for_status()
        return [Customer.model_validate(item) for item in resp.json()]

    def get_customer(self, customer_id: int) -> Customer | None:
        resp = self._http.get(f"/customers/{customer_id}")
        if resp.status_code == 404:
            return None
        resp.raise_for_status()
        return Customer.model_validate(resp.json())

    def find_by_name(self, name: str) -> list[Customer]:
        resp = self._http.get("/customer_query", params={"name": name})
        resp.raise_for_status()
        return [Customer.model_validate(item) for item in resp.json()]

    def create_customer(self, name: str, address: str = "", paid: bool = False) -> Customer:
        form = {"name": name, "address": address, "paid": "true" if paid else "false"}
        resp = self._http.post("/customers", data=form)
        resp.raise_for_status()
        return Customer.model_validate(resp.json())


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Look up customers whose name contains a substring")
    parser.add_argument("-n", "--name", required=True, help="Customer name")
    parser.add_argument("--url", default=DEFAULT_URL, help="Base URL of the customer service")
    args = parser.parse_args(argv)

    with CustomerClient(base_url=args.url) as client:
        for customer in client.find_by_name(args.name):
            print(customer)


if __name__ == "__main__":
    main()
