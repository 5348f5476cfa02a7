"""Tests for amm_rebalancer/core/params.py — trading params, YAML loading, validation."""

import pytest

from amm_rebalancer.core.errors import InvalidConfiguration, InvalidOracleData
from amm_rebalancer.core.oracle import StaticPriceOracle, encode_static_price_config
from amm_rebalancer.core.params import (
    TradingParams,
    load_trading_params,
    trading_params_from_dict,
    trading_params_hash,
    trading_params_to_dict,
    validate_trading_params,
)

APP_DATA_HEX = "0x" + "ab" * 32
ORACLE_CONFIG = encode_static_price_config(3, 7)


def _params(**kw) -> TradingParams:
    kw.setdefault("min_traded_token0", 1000)
    kw.setdefault("oracle_config", ORACLE_CONFIG)
    kw.setdefault("app_data", bytes.fromhex("ab" * 32))
    return TradingParams(**kw)


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------

class TestTradingParams:
    def test_valid(self):
        p = _params()
        assert p.min_traded_token0 == 1000
        assert p.extra == {}

    @pytest.mark.parametrize("value", [-1, 2**256, True, "1000"])
    def test_bad_min_traded(self, value):
        with pytest.raises(InvalidConfiguration):
            _params(min_traded_token0=value)

    def test_app_data_must_be_32_bytes(self):
        with pytest.raises(InvalidConfiguration):
            _params(app_data=b"\x00" * 31)

    def test_oracle_config_must_be_bytes(self):
        with pytest.raises(InvalidConfiguration):
            _params(oracle_config="0x00")

    def test_extra_cannot_shadow_fields(self):
        with pytest.raises(InvalidConfiguration):
            _params(extra={"app_data": "0x00"})


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

class TestValidate:
    def test_zero_min_rejected_by_default(self):
        with pytest.raises(InvalidConfiguration):
            validate_trading_params(_params(min_traded_token0=0))

    def test_zero_min_allowed_when_configured(self):
        validate_trading_params(_params(min_traded_token0=0), allow_zero_min_traded=True)

    def test_oracle_config_checked_by_adapter(self):
        validate_trading_params(_params(), oracle=StaticPriceOracle())
        with pytest.raises(InvalidConfiguration) as exc_info:
            validate_trading_params(_params(oracle_config=b"\x01"), oracle=StaticPriceOracle())
        assert isinstance(exc_info.value.__cause__, InvalidOracleData)

    def test_rejects_non_params(self):
        with pytest.raises(InvalidConfiguration):
            validate_trading_params({"min_traded_token0": 1})


# ---------------------------------------------------------------------------
# Dict / YAML
# ---------------------------------------------------------------------------

class TestFromDict:
    def test_hex_fields(self):
        p = trading_params_from_dict(
            {"min_traded_token0": 5, "oracle_config": "0x0102", "app_data": APP_DATA_HEX, "label": "eth-usdc"}
        )
        assert p.oracle_config == b"\x01\x02"
        assert p.app_data == bytes.fromhex("ab" * 32)
        assert p.extra == {"label": "eth-usdc"}

    def test_to_dict_then_from_dict(self):
        p = _params(extra={"label": "x"})
        assert trading_params_from_dict(trading_params_to_dict(p)) == p

    def test_missing_key(self):
        with pytest.raises(InvalidConfiguration, match="app_data"):
            trading_params_from_dict({"min_traded_token0": 5, "oracle_config": "0x"})

    def test_bad_hex(self):
        with pytest.raises(InvalidConfiguration):
            trading_params_from_dict({"min_traded_token0": 5, "oracle_config": "0xzz", "app_data": APP_DATA_HEX})


class TestLoadYaml:
    def test_load(self, tmp_path):
        path = tmp_path / "params.yaml"
        path.write_text(
            "min_traded_token0: 1000\n"
            f"oracle_config: \"0x{ORACLE_CONFIG.hex()}\"\n"
            f"app_data: \"{APP_DATA_HEX}\"\n"
            "label: eth-usdc\n",
            encoding="utf-8",
        )
        p = load_trading_params(path)
        assert p == _params(extra={"label": "eth-usdc"})

    def test_unquoted_hex_is_rejected(self, tmp_path):
        # YAML reads a bare 0x... literal as an integer.
        path = tmp_path / "params.yaml"
        path.write_text(
            "min_traded_token0: 1000\n"
            "oracle_config: \"0x\"\n"
            f"app_data: {APP_DATA_HEX}\n",
            encoding="utf-8",
        )
        with pytest.raises(InvalidConfiguration):
            load_trading_params(path)

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "params.yaml"
        path.write_text("min_traded_token0: [1, 2\n", encoding="utf-8")
        with pytest.raises(InvalidConfiguration):
            load_trading_params(path)

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "params.yaml"
        path.write_text("- 1\n- 2\n", encoding="utf-8")
        with pytest.raises(InvalidConfiguration):
            load_trading_params(path)


# ---------------------------------------------------------------------------
# Hash
# ---------------------------------------------------------------------------

class TestHash:
    def test_deterministic(self):
        assert trading_params_hash(_params()) == trading_params_hash(_params())
        assert trading_params_hash(_params()).startswith("0x")
        assert len(trading_params_hash(_params())) == 66

    def test_every_field_is_bound(self):
        base = trading_params_hash(_params())
        assert trading_params_hash(_params(min_traded_token0=1001)) != base
        assert trading_params_hash(_params(oracle_config=b"")) != base
        assert trading_params_hash(_params(app_data=b"\x00" * 32)) != base
        assert trading_params_hash(_params(extra={"label": "x"})) != base

    def test_float_extra_is_not_hashable(self):
        with pytest.raises(InvalidConfiguration):
            trading_params_hash(_params(extra={"ratio": 0.5}))
