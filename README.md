# gatesdk

An asyncio client for the Gate perpetual futures API. It provides:

- signed REST requests (HMAC-SHA512 over the method, path, query, body hash and timestamp, sent
  in the `KEY` / `SIGN` / `Timestamp` headers);
- futures calls for positions, accounts, contract details, placing orders and looking orders up;
- a reconnecting WebSocket listener for the `futures.candlesticks` channel, with a heartbeat.

## Installation

```
pip install gatesdk
```

With the test tools:

```
pip install "gatesdk[test]"
```

## REST usage

```python
import asyncio
from gatesdk.client import GateClient

async def main():
    client = GateClient(
        debug=False,
        testnet=False,
        api_key="placeholder",
        secret_key="secret",
        domain="https://api.example.com",
        prefix="/api/v4",
    )

    contract = await client.futures_contract("usdt", "BTC_USDT")
    print(contract.name, contract.mark_price)

    order = await client.futures_trade_orders("usdt", "BTC_USDT", 1, price="0", tif="ioc")
    print(order.id, order.status)

    print(await client.futures_orders("usdt", str(order.id)))
    print(await client.futures_positions("usdt", "BTC_USDT"))
    print(await client.futures_account("usdt"))

asyncio.run(main())
```

`GateClient` is a frozen dataclass holding `debug`, `testnet`, `api_key`, `secret_key`, `domain`
and `prefix`. Requests go to `<domain>/<prefix>/<path>`. The `testnet` flag is stored but does not
change where requests are sent; point `domain` at the host you want.

- `futures_positions(settle, contract)` and `futures_account(settle)` return the decoded JSON.
- `futures_contract(settle, contract)` returns a `ContractInfo`.
- `futures_trade_orders(settle, contract, size, price, close, auto_size, reduce_only, tif)` and
  `futures_orders(settle, order_id)` return a `FuturesOrder`. A positive `size` buys, a negative
  one sells; closing orders use `size=0` with `close=True` or, in dual-position mode,
  `auto_size="close_long"` / `"close_short"`. `iceberg` is always sent as 0, and options left as
  `None` are not sent.

Any signed call can be made directly with `GateClient.get(path, params)` and
`GateClient.post(path, body)`; both return the decoded JSON response. GET parameters are sorted by
key, and POST bodies are sent as compact JSON with sorted keys.

With `debug=True` the client prints the signing string, URL, parameters or body, signature and
raw response of every request.

Errors are raised, not returned: HTTP transport errors come from `httpx`, a response that is not
JSON raises `json.JSONDecodeError`, and a response that does not fit a model raises
`gatesdk.models.ModelError` (a `ValueError`).

## Models and helpers

`gatesdk.models` holds the `FuturesOrder` and `ContractInfo` dataclasses. `from_dict` builds one
from a decoded JSON object, checking types and integer ranges and ignoring unknown keys;
`to_dict` turns it back into a dict using the wire names (so `ContractInfo.contract_type` is
written as `type`).

`gatesdk.signing` exposes the pieces used to sign requests: `sha512_hex`, `hmac_sha512_hex`,
`join_url_path`, `canonical_query`, `build_sign_string`, `build_headers`, `build_full_url` and
`current_timestamp`.

`gatesdk.utils` has `float_from_str` and `int_from_str` for numbers sent as strings: an empty
string gives `0.0`, a blank string gives `0`, and anything malformed or outside the signed 64-bit
range raises `ValueError`.

## Streaming candlesticks

```python
import asyncio
from gatesdk.websocket import run_with_callback

async def on_message(text: str) -> None:
    print(text)

asyncio.run(run_with_callback("fx-ws.example.com", "1m", "BTC_USDT", on_message))
```

To receive messages on an object, subclass `gatesdk.websocket.MessageHandler`, implement
`async def handle(self, msg)` and pass an instance to `run_with_handler`.

The listener connects to `wss://<domain>/v4/ws/usdt` (see `ws_url`) and sends a subscription
built by `subscribe_message`. Every text message is passed to the callback or handler; other
frames are ignored. When nothing arrives for 20 seconds it sends a `futures.ping` message (see
`ping_message`).

If connecting or receiving fails, it waits and reconnects: first after 5 seconds, then doubling
the wait up to 60 seconds. A successful subscription resets the wait and the retry count; after
10 retries without one, the listener returns. Progress and failures are reported through the
`gatesdk.websocket` logger.

## What this package does not do

It is a library only: it installs no command-line program. It covers just the REST calls and the
single candlestick channel listed above, and it does not send the subscription again on a timer
once a connection is up.