"""
Trading parameters.

`TradingParams` is the immutable per-period configuration bundle:

- `min_traded_token0`: floor (in token0 units) below which no order is worth
  proposing or accepting,
- `oracle_config`: opaque bytes handed to the reference price adapter,
- `app_data`: opaque 32 bytes echoed into every order,
- `extra`: any other configuration keys, passed through uninterpreted.

Structural checks run on construction; policy checks (zero floor allowed?
oracle config understood by the adapter?) run in `validate_trading_params`,
once per period.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml

from ..kernels.python.uint_math import UINT256_MAX
from ..state.canonical import bytes_to_hex, hash_canonical, hex_to_bytes, hex_to_bytes_fixed
from ..state.orders import APP_DATA_BYTES
from .errors import InvalidConfiguration, OracleError
from .oracle import ReferencePriceAdapter

logger = logging.getLogger(__name__)

TRADING_PARAMS_HASH_LABEL = "trading_params"
_RECOGNIZED_KEYS = ("min_traded_token0", "oracle_config", "app_data")


@dataclass(frozen=True)
class TradingParams:
    min_traded_token0: int
    oracle_config: bytes
    app_data: bytes
    extra: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        v = self.min_traded_token0
        if not isinstance(v, int) or isinstance(v, bool):
            raise InvalidConfiguration("min_traded_token0 must be an int")
        if v < 0 or v > UINT256_MAX:
            raise InvalidConfiguration(f"min_traded_token0 out of uint256 range: {v}")
        if not isinstance(self.oracle_config, bytes):
            raise InvalidConfiguration("oracle_config must be bytes")
        if not isinstance(self.app_data, bytes) or len(self.app_data) != APP_DATA_BYTES:
            raise InvalidConfiguration(f"app_data must be exactly {APP_DATA_BYTES} bytes")
        if not isinstance(self.extra, Mapping):
            raise InvalidConfiguration("extra must be a mapping")
        for key in self.extra:
            if key in _RECOGNIZED_KEYS:
                raise InvalidConfiguration(f"extra must not shadow recognized field {key!r}")


def validate_trading_params(
    params: TradingParams,
    *,
    allow_zero_min_traded: bool = False,
    oracle: Optional[ReferencePriceAdapter] = None,
) -> None:
    """
    Policy validation, run once per period before any order is generated or accepted.

    Raises InvalidConfiguration.
    """
    if not isinstance(params, TradingParams):
        raise InvalidConfiguration("params must be TradingParams")
    if params.min_traded_token0 == 0 and not allow_zero_min_traded:
        raise InvalidConfiguration("min_traded_token0 must be positive (zero not allowed)")
    if oracle is not None:
        try:
            oracle.validate_config(params.oracle_config)
        except OracleError as exc:
            raise InvalidConfiguration(f"invalid oracle config: {exc}") from exc


def trading_params_to_dict(params: TradingParams) -> Dict[str, Any]:
    out: Dict[str, Any] = dict(params.extra)
    out["min_traded_token0"] = int(params.min_traded_token0)
    out["oracle_config"] = bytes_to_hex(params.oracle_config)
    out["app_data"] = bytes_to_hex(params.app_data)
    return out


def trading_params_from_dict(obj: Mapping[str, Any]) -> TradingParams:
    """
    Build params from a plain mapping (e.g. parsed YAML/JSON).

    `oracle_config` and `app_data` are hex strings; unknown keys go to `extra`.
    """
    if not isinstance(obj, Mapping):
        raise InvalidConfiguration("trading params must be a mapping")
    missing = [k for k in _RECOGNIZED_KEYS if k not in obj]
    if missing:
        raise InvalidConfiguration(f"missing trading params: {', '.join(missing)}")

    oracle_raw = obj["oracle_config"]
    app_raw = obj["app_data"]
    try:
        oracle_config = oracle_raw if isinstance(oracle_raw, bytes) else hex_to_bytes(oracle_raw, name="oracle_config")
        app_data = app_raw if isinstance(app_raw, bytes) else hex_to_bytes_fixed(
            app_raw, nbytes=APP_DATA_BYTES, name="app_data"
        )
    except (TypeError, ValueError) as exc:
        raise InvalidConfiguration(str(exc)) from exc

    extra = {k: v for k, v in obj.items() if k not in _RECOGNIZED_KEYS}
    return TradingParams(
        min_traded_token0=obj["min_traded_token0"],
        oracle_config=oracle_config,
        app_data=app_data,
        extra=extra,
    )


def load_trading_params(path: Union[str, Path]) -> TradingParams:
    """
    Load params from a YAML file.

    Hex values must be quoted: YAML reads a bare `0x...` as an integer.
    """
    p = Path(path)
    try:
        obj = yaml.safe_load(p.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise InvalidConfiguration(f"invalid YAML in {p}: {exc}") from exc
    if not isinstance(obj, Mapping):
        raise InvalidConfiguration(f"{p}: trading params YAML must be a mapping")
    params = trading_params_from_dict(obj)
    logger.debug("Loaded trading params from %s (min_traded_token0=%s)", p, params.min_traded_token0)
    return params


def trading_params_hash(params: TradingParams) -> str:
    try:
        return hash_canonical(TRADING_PARAMS_HASH_LABEL, trading_params_to_dict(params))
    except TypeError as exc:
        raise InvalidConfiguration(f"trading params are not canonically encodable: {exc}") from exc
