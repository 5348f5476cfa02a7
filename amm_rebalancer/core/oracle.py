"""
Reference price adapters.

This module is intentionally small:
- The functional core consumes a `ReferencePrice` and never fetches anything.
- An adapter turns opaque `oracle_config` bytes into that price, failing with
  `OracleUnavailable` (no answer) or `InvalidOracleData` (unusable answer).

Shipped adapters:
- `StaticPriceOracle`: the config *is* the price (two big-endian uint256).
- `PairReservesPriceOracle`: the price is the reserve ratio of a reference
  constant-product pair read through a `ReserveReader`.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Mapping, Protocol

from ..state.canonical import canonical_json_bytes
from ..state.reserves import ReserveReader
from .errors import InvalidOracleData, OracleUnavailable
from .types import ReferencePrice

logger = logging.getLogger(__name__)

UINT256_BYTES = 32
STATIC_CONFIG_BYTES = 2 * UINT256_BYTES


class ReferencePriceAdapter(Protocol):
    def get_price(self, oracle_config: bytes) -> ReferencePrice:
        ...

    def validate_config(self, oracle_config: bytes) -> None:
        """Raise InvalidOracleData if `oracle_config` cannot be understood."""
        ...


def encode_static_price_config(numerator: int, denominator: int) -> bytes:
    for name, v in (("numerator", numerator), ("denominator", denominator)):
        if not isinstance(v, int) or isinstance(v, bool) or v <= 0:
            raise ValueError(f"{name} must be a positive int")
        if v.bit_length() > 8 * UINT256_BYTES:
            raise ValueError(f"{name} must fit in uint256")
    return numerator.to_bytes(UINT256_BYTES, "big") + denominator.to_bytes(UINT256_BYTES, "big")


class StaticPriceOracle:
    """Reads the price straight out of the config bytes."""

    def validate_config(self, oracle_config: bytes) -> None:
        self._decode(oracle_config)

    def get_price(self, oracle_config: bytes) -> ReferencePrice:
        numerator, denominator = self._decode(oracle_config)
        return ReferencePrice(numerator=numerator, denominator=denominator)

    @staticmethod
    def _decode(oracle_config: bytes) -> tuple[int, int]:
        if not isinstance(oracle_config, (bytes, bytearray)) or len(oracle_config) != STATIC_CONFIG_BYTES:
            raise InvalidOracleData(f"static price config must be {STATIC_CONFIG_BYTES} bytes")
        numerator = int.from_bytes(oracle_config[:UINT256_BYTES], "big")
        denominator = int.from_bytes(oracle_config[UINT256_BYTES:], "big")
        if numerator == 0 or denominator == 0:
            raise InvalidOracleData("static price must be strictly positive on both sides")
        return numerator, denominator


def encode_pair_oracle_config(*, pool_id: str, token0: str, token1: str) -> bytes:
    """Config for `PairReservesPriceOracle`: price `token0 : token1` from pair `pool_id`."""
    return canonical_json_bytes({"pool_id": pool_id, "token0": token0, "token1": token1})


class PairReservesPriceOracle:
    """
    Prices token0 against token1 using the reserves of another pair.

    The reference pair may list the two tokens in either order; the returned
    ratio is always oriented as `amount of token0 : amount of token1`.
    """

    def __init__(self, reader: ReserveReader) -> None:
        self._reader = reader

    def validate_config(self, oracle_config: bytes) -> None:
        self._decode(oracle_config)

    def get_price(self, oracle_config: bytes) -> ReferencePrice:
        cfg = self._decode(oracle_config)
        try:
            pair = self._reader.get_reserves(cfg["pool_id"])
        except KeyError as exc:
            raise OracleUnavailable(f"reference pair unavailable: {cfg['pool_id']}") from exc

        if (pair.token0, pair.token1) == (cfg["token0"], cfg["token1"]):
            numerator, denominator = pair.reserve0, pair.reserve1
        elif (pair.token0, pair.token1) == (cfg["token1"], cfg["token0"]):
            numerator, denominator = pair.reserve1, pair.reserve0
        else:
            raise InvalidOracleData("reference pair does not trade the requested tokens")

        if numerator == 0 or denominator == 0:
            raise InvalidOracleData(f"reference pair {cfg['pool_id']} has an empty reserve")
        logger.debug("Reference price from pair %s: %s:%s", cfg["pool_id"], numerator, denominator)
        return ReferencePrice(numerator=numerator, denominator=denominator)

    @staticmethod
    def _decode(oracle_config: bytes) -> Mapping[str, Any]:
        if not isinstance(oracle_config, (bytes, bytearray)):
            raise InvalidOracleData("pair oracle config must be bytes")
        try:
            obj = json.loads(bytes(oracle_config).decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise InvalidOracleData(f"pair oracle config is not JSON: {exc}") from exc
        if not isinstance(obj, dict):
            raise InvalidOracleData("pair oracle config must be a JSON object")
        for key in ("pool_id", "token0", "token1"):
            v = obj.get(key)
            if not isinstance(v, str) or not v:
                raise InvalidOracleData(f"pair oracle config field {key!r} must be a non-empty string")
        if obj["token0"] == obj["token1"]:
            raise InvalidOracleData("pair oracle config tokens must differ")
        return obj
