"""Tests for the chain registry and cross-chain policy."""

import pytest

from swapdesk.chains import (
    CHAINS,
    EVM_CHAINS,
    default_chain_for,
    get_chain,
    get_chain_for_network,
    get_network_id,
    is_evm_chain,
    validate_cross_chain,
)
from swapdesk.errors import ChainPolicyViolation


class TestChainRegistry:
    """Tests for chain lookups."""

    def test_all_evm_chains_registered(self):
        for key in EVM_CHAINS:
            assert key in CHAINS
            assert CHAINS[key].is_evm is True

    def test_solana_is_not_evm(self):
        assert is_evm_chain("solana") is False
        assert CHAINS["solana"].recall_chain == "svm"

    def test_get_chain_case_insensitive(self):
        chain = get_chain("Ethereum")
        assert chain is not None
        assert chain.native_symbol == "ETH"

    def test_get_chain_unknown(self):
        assert get_chain("tron") is None

    def test_network_ids(self):
        assert get_network_id("ethereum") == "eth"
        assert get_network_id("polygon") == "polygon_pos"
        assert get_network_id("solana") == "solana"

    def test_unknown_network_id_passes_through(self):
        assert get_network_id("avax") == "avax"

    def test_chain_for_network(self):
        assert get_chain_for_network("eth") == "ethereum"
        assert get_chain_for_network("polygon_pos") == "polygon"
        assert get_chain_for_network("nowhere") is None


class TestDefaultChain:
    """Tests for default chain inference."""

    @pytest.mark.parametrize(
        "symbol,expected",
        [
            ("ETH", "ethereum"),
            ("WETH", "ethereum"),
            ("SOL", "solana"),
            ("BNB", "bsc"),
            ("MATIC", "polygon"),
            ("USDC", "ethereum"),
            ("USDT", "ethereum"),
            ("DAI", "ethereum"),
            ("BONK", "solana"),
            ("WIF", "solana"),
        ],
    )
    def test_known_symbols(self, symbol, expected):
        assert default_chain_for(symbol) == expected

    def test_case_and_whitespace(self):
        assert default_chain_for(" usdc ") == "ethereum"
        assert default_chain_for("eth") == "ethereum"

    def test_unknown_symbol_falls_back_to_solana(self):
        assert default_chain_for("SOMEMEMECOIN") == "solana"

    def test_always_returns_registered_chain(self):
        for symbol in ("ETH", "USDC", "PEPE", "", "X"):
            assert default_chain_for(symbol) in CHAINS


class TestCrossChainPolicy:
    """Tests for validate_cross_chain."""

    @pytest.mark.parametrize("chain", list(CHAINS))
    def test_same_chain_always_valid(self, chain):
        assert validate_cross_chain(chain, chain).ok

    def test_evm_to_evm_valid(self):
        assert validate_cross_chain("ethereum", "base").ok
        assert validate_cross_chain("arbitrum", "bsc").ok

    def test_solana_to_evm_invalid(self):
        result = validate_cross_chain("solana", "ethereum")

        assert not result.ok
        assert isinstance(result.error, ChainPolicyViolation)
        assert "EVM" in result.message
        assert "Solana" in result.message

    def test_evm_to_solana_invalid(self):
        result = validate_cross_chain("ethereum", "solana")

        assert not result.ok
        assert result.error.from_chain == "ethereum"
        assert result.error.to_chain == "solana"

    def test_case_insensitive(self):
        assert validate_cross_chain("ETHEREUM", "ethereum").ok
        assert validate_cross_chain("Base", "Polygon").ok

    def test_violation_lists_evm_chains(self):
        result = validate_cross_chain("solana", "base")

        for key in EVM_CHAINS:
            assert key in result.message

    def test_raise_for_error(self):
        validate_cross_chain("base", "optimism").raise_for_error()

        with pytest.raises(ChainPolicyViolation):
            validate_cross_chain("solana", "polygon").raise_for_error()
