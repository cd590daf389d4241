"""Authenticated REST client for the futures API."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import httpx

from .models import ContractInfo, FuturesOrder
from .signing import (
    build_full_url,
    build_headers,
    build_sign_string,
    canonical_query,
    current_timestamp,
    hmac_sha512_hex,
    join_url_path,
    sha512_hex,
)


def _encode_body(body: Mapping[str, Any]) -> str:
    return json.dumps(
        {key: body[key] for key in sorted(body)},
        separators=(",", ":"),
        ensure_ascii=False,
    )


@dataclass(frozen=True)
class GateClient:
    """Holds credentials and endpoint settings and issues signed requests."""

    debug: bool
    testnet: bool
    api_key: str
    secret_key: str = field(repr=False)
    domain: str
    prefix: str

    def _sign(self, method: str, request_path: str, query: str, payload: str, timestamp: str):
        url_path = join_url_path(self.prefix, request_path)
        sign_str = build_sign_string(method, url_path, query, sha512_hex(payload), timestamp)
        return sign_str, hmac_sha512_hex(self.secret_key, sign_str)

    async def get(self, request_path: str, parameters: Mapping[str, str] | None = None) -> Any:
        """Send a signed GET request and return the decoded JSON response."""
        params = dict(parameters or {})
        timestamp = current_timestamp()
        sign_str, sign = self._sign("GET", request_path, canonical_query(params), "", timestamp)
        url = build_full_url(self.domain, self.prefix, request_path, params)
        headers = build_headers(self.api_key, sign, timestamp)

        if self.debug:
            print(f"SIGN STRING:\n{sign_str}")
            print(f"[GET] URL: {url}")
            print(f"[GET] Params: {params}")
            print(f"[GET] Sign: {sign}")

        async with httpx.AsyncClient() as http:
            response = await http.get(url, headers=headers)
        text = response.text

        if self.debug:
            print(f"[GET] Response: {text!r}")
        return json.loads(text)

    async def post(self, request_path: str, body_params: Mapping[str, Any]) -> Any:
        """Send a signed POST request with a JSON body and return the decoded response."""
        body_json = _encode_body(body_params)
        timestamp = current_timestamp()
        sign_str, sign = self._sign("POST", request_path, "", body_json, timestamp)
        url = build_full_url(self.domain, self.prefix, request_path, {})
        headers = build_headers(self.api_key, sign, timestamp)

        if self.debug:
            print(f"SIGN STRING:\n{sign_str}")
            print(f"[POST] URL: {url}")
            print(f"[POST] Body: {body_json}")
            print(f"[POST] Sign: {sign}")

        async with httpx.AsyncClient() as http:
            response = await http.post(url, headers=headers, content=body_json.encode("utf-8"))
        text = response.text

        if self.debug:
            print(f"[POST] Response: {text!r}")
        return json.loads(text)

    async def futures_positions(self, settle: str, contract: str) -> Any:
        """Fetch a single position."""
        return await self.get(f"/futures/{settle}/positions/{contract}")

    async def futures_account(self, settle: str) -> Any:
        """Fetch the futures account."""
        return await self.get(f"/futures/{settle}/accounts")

    async def futures_contract(self, settle: str, contract: str) -> ContractInfo:
        """Fetch the details of one contract."""
        data = await self.get(f"/futures/{settle}/contracts/{contract}")
        return ContractInfo.from_dict(data)

    async def futures_trade_orders(
        self,
        settle: str,
        contract: str,
        size: int,
        price: str | None = None,
        close: bool | None = None,
        auto_size: str | None = None,
        reduce_only: bool | None = None,
        tif: str | None = None,
    ) -> FuturesOrder:
        """Place a futures order.

        A positive size buys and a negative size sells; closing orders use size 0
        together with ``close`` or, in dual-position mode, ``auto_size``.
        """
        params: dict[str, Any] = {"contract": contract, "size": size, "iceberg": 0}
        optional = {
            "price": price,
            "close": close,
            "reduce_only": reduce_only,
            "auto_size": auto_size,
            "tif": tif,
        }
        params.update((key, value) for key, value in optional.items() if value is not None)
        data = await self.post(f"/futures/{settle}/orders", params)
        return FuturesOrder.from_dict(data)

    async def futures_orders(self, settle: str, order_id: str) -> FuturesOrder:
        """Fetch the details of one order."""
        data = await self.get(f"/futures/{settle}/orders/{order_id}")
        return FuturesOrder.from_dict(data)