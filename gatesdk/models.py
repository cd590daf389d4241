"""Response models for futures orders and contract details."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import MISSING, dataclass, field, fields
from typing import Any, TypeVar

_I64 = (-(2**63), 2**63 - 1)
_U64 = (0, 2**64 - 1)

_ModelT = TypeVar("_ModelT", bound="_JsonModel")


class ModelError(ValueError):
    """Raised when a payload does not match a model."""


def _field(kind: str, *, optional: bool = False, key: str | None = None) -> Any:
    return field(
        default=None if optional else MISSING,
        metadata={"kind": kind, "optional": optional, "key": key},
    )


def _convert(kind: str, key: str, value: Any) -> Any:
    if kind == "str" and isinstance(value, str):
        return value
    if kind == "bool" and isinstance(value, bool):
        return value
    if kind in ("i64", "u64") and isinstance(value, int) and not isinstance(value, bool):
        low, high = _I64 if kind == "i64" else _U64
        if not low <= value <= high:
            raise ModelError(f"field `{key}`: {value} is out of range for {kind}")
        return value
    if kind == "f64" and isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    raise ModelError(f"field `{key}`: invalid type {type(value).__name__}, expected {kind}")


class _JsonModel:
    @classmethod
    def from_dict(cls: type[_ModelT], data: Mapping[str, Any]) -> _ModelT:
        """Build the model from a decoded JSON object; unknown keys are ignored."""
        if not isinstance(data, Mapping):
            raise ModelError(f"expected a JSON object, got {type(data).__name__}")
        values: dict[str, Any] = {}
        for spec in fields(cls):  # type: ignore[arg-type]
            meta = spec.metadata
            key = meta["key"] or spec.name
            raw = data.get(key)
            if raw is None:
                if meta["optional"]:
                    values[spec.name] = None
                    continue
                if key in data:
                    raise ModelError(f"field `{key}`: invalid type null, expected {meta['kind']}")
                raise ModelError(f"missing field `{key}`")
            values[spec.name] = _convert(meta["kind"], key, raw)
        return cls(**values)

    def to_dict(self) -> dict[str, Any]:
        """Return the model as a JSON-ready dict using the wire field names."""
        return {
            spec.metadata["key"] or spec.name: getattr(self, spec.name)
            for spec in fields(self)  # type: ignore[arg-type]
        }


@dataclass(kw_only=True)
class FuturesOrder(_JsonModel):
    """Details of a futures order."""

    id: int = _field("u64")
    user: int = _field("u64")
    create_time: float = _field("f64")
    finish_time: float | None = _field("f64", optional=True)
    finish_as: str | None = _field("str", optional=True)
    status: str = _field("str")
    contract: str = _field("str")
    size: int = _field("i64")
    iceberg: int = _field("i64")
    price: str = _field("str")
    close: bool | None = _field("bool", optional=True)
    is_close: bool = _field("bool")
    reduce_only: bool | None = _field("bool", optional=True)
    is_reduce_only: bool = _field("bool")
    is_liq: bool = _field("bool")
    tif: str | None = _field("str", optional=True)
    left: int | None = _field("i64", optional=True)
    fill_price: str | None = _field("str", optional=True)
    text: str | None = _field("str", optional=True)
    tkfr: str | None = _field("str", optional=True)
    mkfr: str | None = _field("str", optional=True)
    refu: int | None = _field("u64", optional=True)
    auto_size: str | None = _field("str", optional=True)
    stp_id: int = _field("u64")
    stp_act: str = _field("str")
    amend_text: str = _field("str")
    biz_info: str = _field("str")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> FuturesOrder:
        return super().from_dict(data)

    def to_dict(self) -> dict[str, Any]:
        return super().to_dict()


@dataclass(kw_only=True)
class ContractInfo(_JsonModel):
    """Specification and live state of a futures contract."""

    name: str = _field("str")
    contract_type: str = _field("str", key="type")
    quanto_multiplier: str = _field("str")
    ref_discount_rate: str = _field("str")
    order_price_deviate: str = _field("str")
    maintenance_rate: str = _field("str")
    mark_type: str = _field("str")
    last_price: str = _field("str")
    mark_price: str = _field("str")
    index_price: str = _field("str")
    funding_rate_indicative: str = _field("str")
    mark_price_round: str = _field("str")
    funding_offset: int = _field("i64")
    in_delisting: bool = _field("bool")
    risk_limit_base: str = _field("str")
    interest_rate: str = _field("str")
    order_price_round: str = _field("str")
    order_size_min: int = _field("i64")
    ref_rebate_rate: str = _field("str")
    funding_interval: int = _field("i64")
    risk_limit_step: str = _field("str")
    leverage_min: str = _field("str")
    leverage_max: str = _field("str")
    risk_limit_max: str = _field("str")
    maker_fee_rate: str = _field("str")
    taker_fee_rate: str = _field("str")
    funding_rate: str = _field("str")
    order_size_max: int = _field("i64")
    funding_next_apply: int = _field("i64")
    short_users: int = _field("i64")
    config_change_time: int = _field("i64")
    trade_size: int = _field("i64")
    position_size: int = _field("i64")
    long_users: int = _field("i64")
    funding_impact_value: str = _field("str")
    orders_limit: int = _field("i64")
    trade_id: int = _field("i64")
    orderbook_id: int = _field("i64")
    enable_bonus: bool = _field("bool")
    enable_credit: bool = _field("bool")
    create_time: int = _field("i64")
    funding_cap_ratio: str = _field("str")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ContractInfo:
        return super().from_dict(data)

    def to_dict(self) -> dict[str, Any]:
        return super().to_dict()