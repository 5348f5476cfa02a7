"""
Core rebalancing algorithms
"""

from .commitment import CommitmentGuard, CommitmentPolicy, CommitmentUnauthorized
from .errors import (
    ArithmeticOverflow,
    DivisionByZero,
    InvalidConfiguration,
    InvalidOracleData,
    InvalidReferencePrice,
    OracleError,
    OracleUnavailable,
    OrderNotValid,
    RebalancerError,
)
from .generator import generate, valid_to_bucket
from .oracle import (
    PairReservesPriceOracle,
    ReferencePriceAdapter,
    StaticPriceOracle,
    encode_pair_oracle_config,
    encode_static_price_config,
)
from .params import (
    TradingParams,
    load_trading_params,
    trading_params_from_dict,
    trading_params_hash,
    validate_trading_params,
)
from .types import Asset, NoTrade, ReferencePrice
from .verifier import is_valid, verify

__all__ = [
    "CommitmentGuard",
    "CommitmentPolicy",
    "CommitmentUnauthorized",
    "ArithmeticOverflow",
    "DivisionByZero",
    "InvalidConfiguration",
    "InvalidOracleData",
    "InvalidReferencePrice",
    "OracleError",
    "OracleUnavailable",
    "OrderNotValid",
    "RebalancerError",
    "generate",
    "valid_to_bucket",
    "PairReservesPriceOracle",
    "ReferencePriceAdapter",
    "StaticPriceOracle",
    "encode_pair_oracle_config",
    "encode_static_price_config",
    "TradingParams",
    "load_trading_params",
    "trading_params_from_dict",
    "trading_params_hash",
    "validate_trading_params",
    "Asset",
    "NoTrade",
    "ReferencePrice",
    "is_valid",
    "verify",
]
