"""Helpers for classifying order types and decoding fund attributes."""

from __future__ import annotations

from .contract import FundAssetType, FundDistributionPolicyIndicator

_FUND_ASSET_TYPES = {
    "000": FundAssetType.OTHERS,
    "001": FundAssetType.MONEY_MARKET,
    "002": FundAssetType.FIXED_INCOME,
    "003": FundAssetType.MULTI_ASSET,
    "004": FundAssetType.EQUITY,
    "005": FundAssetType.SECTOR,
    "006": FundAssetType.GUARANTEED,
    "007": FundAssetType.ALTERNATIVE,
}

_DISTRIBUTION_POLICIES = {
    "N": FundDistributionPolicyIndicator.ACCUMULATION_FUND,
    "Y": FundDistributionPolicyIndicator.INCOME_FUND,
}


def is_peg_bench_order(order_type: str) -> bool:
    """Tell whether an order type is pegged to a benchmark."""
    return order_type in ("PEG BENCH", "PEGBENCH")


def is_peg_mid_order(order_type: str) -> bool:
    """Tell whether an order type is pegged to the midpoint."""
    return order_type in ("PEG MID", "PEGMID")


def is_peg_best_order(order_type: str) -> bool:
    """Tell whether an order type is pegged to the best price."""
    return order_type in ("PEG BEST", "PEGBEST")


def fund_asset_type(value: str) -> FundAssetType:
    """Decode a fund asset type code; unknown codes give NONE."""
    return _FUND_ASSET_TYPES.get(value, FundAssetType.NONE)


def fund_distribution_policy_indicator(value: str) -> FundDistributionPolicyIndicator:
    """Decode a fund distribution policy flag; unknown flags give NONE."""
    return _DISTRIBUTION_POLICIES.get(value, FundDistributionPolicyIndicator.NONE)