"""Contract descriptions and the enumerations that go with them."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from decimal import Decimal
from enum import IntEnum
from typing import Iterable, Optional

UNSET_INTEGER = 2**31 - 1
INFINITY_STR = "Infinity"

TickerId = int
OrderId = int


class FaDataType(IntEnum):
    """Kinds of financial-advisor configuration data."""

    GROUPS = 1
    ALIASES = 3


def fa_data_type_str(fa_data_type) -> Optional[str]:
    """Return the wire name of a financial-advisor data type, or None if unknown."""
    try:
        return FaDataType(fa_data_type).name
    except ValueError:
        return None


class MarketDataType(IntEnum):
    """Market data delivery modes."""

    REALTIME = 1
    FROZEN = 2
    DELAYED = 3
    DELAYED_FROZEN = 4


class FundAssetType(IntEnum):
    """Asset class of a fund."""

    NONE = 0
    OTHERS = 1
    MONEY_MARKET = 2
    FIXED_INCOME = 3
    MULTI_ASSET = 4
    EQUITY = 5
    SECTOR = 6
    GUARANTEED = 7
    ALTERNATIVE = 8


class FundDistributionPolicyIndicator(IntEnum):
    """Whether a fund accumulates or distributes income."""

    NONE = 0
    ACCUMULATION_FUND = 1
    INCOME_FUND = 2


class LegOpenClose(IntEnum):
    """Open/close state of a combination leg."""

    SAME_POS = 0
    OPEN_POS = 1
    CLOSE_POS = 2
    UNKNOWN_POS = 3


@dataclass
class TagValue:
    """A free-form tag and its value."""

    tag: str = ""
    value: str = ""


@dataclass
class IneligibilityReason:
    """Why a contract may not be traded."""

    id: str = ""
    description: str = ""


@dataclass
class ComboLeg:
    """One leg of a combination contract."""

    con_id: int = 0
    ratio: int = 0
    action: str = ""
    exchange: str = ""
    open_close: int = 0
    short_sale_slot: int = 0
    designated_location: str = ""
    exempt_code: int = -1


@dataclass
class DeltaNeutralContract:
    """The hedging leg of a delta-neutral order."""

    con_id: int = 0
    delta: float = 0.0
    price: float = 0.0


@dataclass
class Contract:
    """Identifies a tradable instrument."""

    con_id: int = 0
    symbol: str = ""
    sec_type: str = ""
    last_trade_date_or_contract_month: str = ""
    last_trade_date: str = ""
    strike: float = 0.0
    right: str = ""
    multiplier: str = ""
    exchange: str = ""
    primary_exchange: str = ""
    currency: str = ""
    local_symbol: str = ""
    trading_class: str = ""
    include_expired: bool = False
    sec_id_type: str = ""
    sec_id: str = ""
    description: str = ""
    issuer_id: str = ""
    combo_legs_descrip: str = ""
    combo_legs: Optional[list[ComboLeg]] = None
    delta_neutral_contract: Optional[DeltaNeutralContract] = None


def clone_combo_legs(legs: Optional[Iterable[Optional[ComboLeg]]]) -> Optional[list[ComboLeg]]:
    """Return independent copies of the given legs, skipping empty entries."""
    if legs is None:
        return None
    return [dataclasses.replace(leg) for leg in legs if leg is not None]


@dataclass
class ContractDetails:
    """Full description of a contract as reported by the server."""

    contract: Contract = field(default_factory=Contract)
    market_name: str = ""
    min_tick: float = 0.0
    order_types: str = ""
    valid_exchanges: str = ""
    price_magnifier: int = 0
    under_con_id: int = 0
    long_name: str = ""
    contract_month: str = ""
    industry: str = ""
    category: str = ""
    subcategory: str = ""
    time_zone_id: str = ""
    trading_hours: str = ""
    liquid_hours: str = ""
    ev_rule: str = ""
    ev_multiplier: float = 0.0
    agg_group: int = UNSET_INTEGER
    under_symbol: str = ""
    under_sec_type: str = ""
    market_rule_ids: str = ""
    real_expiration_date: str = ""
    last_trade_time: str = ""
    stock_type: str = ""
    min_size: Optional[Decimal] = None
    size_increment: Optional[Decimal] = None
    suggested_size_increment: Optional[Decimal] = None
    sec_id_list: Optional[list[TagValue]] = None
    cusip: str = ""
    ratings: str = ""
    desc_append: str = ""
    bond_type: str = ""
    coupon_type: str = ""
    callable: bool = False
    putable: bool = False
    coupon: float = 0.0
    convertible: bool = False
    maturity: str = ""
    issue_date: str = ""
    next_option_date: str = ""
    next_option_type: str = ""
    next_option_partial: bool = False
    notes: str = ""
    fund_name: str = ""
    fund_family: str = ""
    fund_type: str = ""
    fund_front_load: str = ""
    fund_back_load: str = ""
    fund_back_load_time_interval: str = ""
    fund_management_fee: str = ""
    fund_closed: bool = False
    fund_closed_for_new_investors: bool = False
    fund_closed_for_new_money: bool = False
    fund_notify_amount: str = ""
    fund_minimum_initial_purchase: str = ""
    fund_subsequent_minimum_purchase: str = ""
    fund_blue_sky_states: str = ""
    fund_blue_sky_territories: str = ""
    fund_distribution_policy_indicator: FundDistributionPolicyIndicator = FundDistributionPolicyIndicator.NONE
    fund_asset_type: FundAssetType = FundAssetType.NONE
    ineligibility_reason_list: Optional[list[IneligibilityReason]] = None


@dataclass
class ContractDescription:
    """A contract with the derivative security types available on it."""

    contract: Contract = field(default_factory=Contract)
    derivative_sec_types: list[str] = field(default_factory=list)