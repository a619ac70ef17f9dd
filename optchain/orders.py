"""Orders, their state, executions, commission reports and scanner requests."""

from __future__ import annotations

import dataclasses
import math
import sys
from dataclasses import dataclass, field
from decimal import Decimal
from enum import IntEnum
from typing import Any, Iterable, Optional

from .contract import UNSET_INTEGER, TagValue
from .market import SoftDollarTier

UNSET_DOUBLE = sys.float_info.max
UNSET_LONG = 2**63 - 1
UNSET_DECIMAL: Optional[Decimal] = None
COMPETE_AGAINST_BEST_OFFSET_UP_TO_MID = math.inf
NO_ROW_NUMBER_SPECIFIED = -1


class Origin(IntEnum):
    """Who originates an order."""

    CUSTOMER = 0
    FIRM = 1
    UNKNOWN = 2


class AuctionStrategy(IntEnum):
    """Auction strategies for BOX exchange orders."""

    AUCTION_UNSET = 0
    AUCTION_MATCH = 1
    AUCTION_IMPROVEMENT = 2
    AUCTION_TRANSPARENT = 3


class UsePriceMgmtAlgo(IntEnum):
    """Whether the price management algorithm is used."""

    DONT_USE = 0
    USE = 1
    DEFAULT = UNSET_INTEGER


@dataclass
class OrderComboLeg:
    """Per-leg price of a combination order."""

    price: float = UNSET_DOUBLE


def clone_order_combo_legs(
    legs: Optional[Iterable[Optional[OrderComboLeg]]],
) -> Optional[list[OrderComboLeg]]:
    """Return independent copies of the given legs, skipping empty entries."""
    if legs is None:
        return None
    return [dataclasses.replace(leg) for leg in legs if leg is not None]


@dataclass
class Order:
    """An order and all of its optional parameters."""

    # identifiers
    order_id: int = 0
    client_id: int = 0
    perm_id: int = 0

    # main fields
    action: str = ""
    total_quantity: Optional[Decimal] = UNSET_DECIMAL
    order_type: str = ""
    lmt_price: float = UNSET_DOUBLE
    aux_price: float = UNSET_DOUBLE

    # extended fields
    tif: str = ""
    active_start_time: str = ""
    active_stop_time: str = ""
    oca_group: str = ""
    oca_type: int = 0
    order_ref: str = ""
    transmit: bool = True
    parent_id: int = 0
    block_order: bool = False
    sweep_to_fill: bool = False
    display_size: int = 0
    trigger_method: int = 0
    outside_rth: bool = False
    hidden: bool = False
    good_after_time: str = ""
    good_till_date: str = ""
    rule80a: str = ""
    all_or_none: bool = False
    min_qty: int = UNSET_INTEGER
    percent_offset: float = UNSET_DOUBLE
    override_percentage_constraints: bool = False
    trail_stop_price: float = UNSET_DOUBLE
    trailing_percent: float = UNSET_DOUBLE

    # financial advisors
    fa_group: str = ""
    fa_method: str = ""
    fa_percentage: str = ""

    # institutional
    open_close: str = ""
    origin: Origin = Origin.CUSTOMER
    short_sale_slot: int = 0
    designated_location: str = ""
    exempt_code: int = -1

    # SMART routing
    discretionary_amt: float = 0.0
    opt_out_smart_routing: bool = False

    # BOX exchange
    auction_strategy: int = AuctionStrategy.AUCTION_UNSET
    starting_price: float = UNSET_DOUBLE
    stock_ref_price: float = UNSET_DOUBLE
    delta: float = UNSET_DOUBLE

    # pegged to stock and volatility
    stock_range_lower: float = UNSET_DOUBLE
    stock_range_upper: float = UNSET_DOUBLE

    randomize_size: bool = False
    randomize_price: bool = False

    # volatility orders
    volatility: float = UNSET_DOUBLE
    volatility_type: int = UNSET_INTEGER
    delta_neutral_order_type: str = ""
    delta_neutral_aux_price: float = UNSET_DOUBLE
    delta_neutral_con_id: int = 0
    delta_neutral_settling_firm: str = ""
    delta_neutral_clearing_account: str = ""
    delta_neutral_clearing_intent: str = ""
    delta_neutral_open_close: str = ""
    delta_neutral_short_sale: bool = False
    delta_neutral_short_sale_slot: int = 0
    delta_neutral_designated_location: str = ""
    continuous_update: bool = False
    reference_price_type: int = UNSET_INTEGER

    # combo orders
    basis_points: float = UNSET_DOUBLE
    basis_points_type: int = UNSET_INTEGER

    # scale orders
    scale_init_level_size: int = UNSET_INTEGER
    scale_subs_level_size: int = UNSET_INTEGER
    scale_price_increment: float = UNSET_DOUBLE
    scale_price_adjust_value: float = UNSET_DOUBLE
    scale_price_adjust_interval: int = UNSET_INTEGER
    scale_profit_offset: float = UNSET_DOUBLE
    scale_auto_reset: bool = False
    scale_init_position: int = UNSET_INTEGER
    scale_init_fill_qty: int = UNSET_INTEGER
    scale_random_percent: bool = False
    scale_table: str = ""

    # hedge orders
    hedge_type: str = ""
    hedge_param: str = ""

    # clearing
    account: str = ""
    settling_firm: str = ""
    clearing_account: str = ""
    clearing_intent: str = ""

    # algo orders
    algo_strategy: str = ""
    algo_params: Optional[list[TagValue]] = None
    smart_combo_routing_params: Optional[list[TagValue]] = None
    algo_id: str = ""

    what_if: bool = False
    not_held: bool = False
    solicited: bool = False
    model_code: str = ""

    order_combo_legs: Optional[list[OrderComboLeg]] = None
    order_misc_options: Optional[list[TagValue]] = None

    # pegged-to-benchmark
    reference_contract_id: int = UNSET_INTEGER
    pegged_change_amount: float = UNSET_DOUBLE
    is_pegged_change_amount_decrease: bool = False
    reference_change_amount: float = UNSET_DOUBLE
    reference_exchange_id: str = ""
    adjusted_order_type: str = ""
    trigger_price: float = UNSET_DOUBLE
    adjusted_stop_price: float = UNSET_DOUBLE
    adjusted_stop_limit_price: float = UNSET_DOUBLE
    adjusted_trailing_amount: float = UNSET_DOUBLE
    adjustable_trailing_unit: int = UNSET_INTEGER
    lmt_price_offset: float = UNSET_DOUBLE

    conditions: list[Any] = field(default_factory=list)
    conditions_cancel_order: bool = False
    conditions_ignore_rth: bool = False

    ext_operator: str = ""
    soft_dollar_tier: SoftDollarTier = field(default_factory=lambda: SoftDollarTier("", "", ""))
    cash_qty: float = UNSET_DOUBLE

    mifid2_decision_maker: str = ""
    mifid2_decision_algo: str = ""
    mifid2_execution_trader: str = ""
    mifid2_execution_algo: str = ""

    dont_use_auto_price_for_hedge: bool = False
    is_oms_container: bool = False
    discretionary_up_to_limit_price: bool = False

    auto_cancel_date: str = ""
    filled_quantity: Optional[Decimal] = UNSET_DECIMAL
    ref_futures_con_id: int = UNSET_INTEGER
    auto_cancel_parent: bool = False
    shareholder: str = ""
    imbalance_only: bool = False
    route_marketable_to_bbo: bool = False
    parent_perm_id: int = UNSET_LONG

    use_price_mgmt_algo: UsePriceMgmtAlgo = UsePriceMgmtAlgo.DEFAULT
    duration: int = UNSET_INTEGER
    post_to_ats: int = UNSET_INTEGER
    advanced_error_override: str = ""
    manual_order_time: str = ""
    min_trade_qty: int = UNSET_INTEGER
    min_compete_size: int = UNSET_INTEGER
    compete_against_best_offset: float = UNSET_DOUBLE
    mid_offset_at_whole: float = UNSET_DOUBLE
    mid_offset_at_half: float = UNSET_DOUBLE
    customer_account: str = ""
    professional_customer: bool = False
    bond_accrued_interest: str = ""

    external_user_id: str = ""
    manual_order_indicator: int = UNSET_INTEGER


@dataclass
class OrderState:
    """Margin and commission information for an order."""

    status: str = ""
    init_margin_before: str = ""
    maint_margin_before: str = ""
    equity_with_loan_before: str = ""
    init_margin_change: str = ""
    maint_margin_change: str = ""
    equity_with_loan_change: str = ""
    init_margin_after: str = ""
    maint_margin_after: str = ""
    equity_with_loan_after: str = ""
    commission: float = UNSET_DOUBLE
    min_commission: float = UNSET_DOUBLE
    max_commission: float = UNSET_DOUBLE
    commission_currency: str = ""
    warning_text: str = ""
    completed_time: str = ""
    completed_status: str = ""


@dataclass
class OrderCancel:
    """Extra attributes sent with an order cancellation."""

    manual_order_cancel_time: str = ""
    ext_operator: str = ""
    external_user_id: str = ""
    manual_order_indicator: int = UNSET_INTEGER


@dataclass
class Execution:
    """A fill of an order."""

    exec_id: str = ""
    time: str = ""
    acct_number: str = ""
    exchange: str = ""
    side: str = ""
    shares: Decimal = Decimal(0)
    price: float = 0.0
    perm_id: int = 0
    client_id: int = 0
    order_id: int = 0
    liquidation: int = 0
    cum_qty: Decimal = Decimal(0)
    avg_price: float = 0.0
    order_ref: str = ""
    ev_rule: str = ""
    ev_multiplier: float = 0.0
    model_code: str = ""
    last_liquidity: int = 0
    pending_price_revision: bool = False


@dataclass
class ExecutionFilter:
    """Criteria for selecting executions."""

    client_id: int = 0
    acct_code: str = ""
    time: str = ""
    symbol: str = ""
    sec_type: str = ""
    exchange: str = ""
    side: str = ""


@dataclass
class CommissionReport:
    """Commission charged for an execution."""

    exec_id: str = ""
    commission: float = 0.0
    currency: str = ""
    realized_pnl: float = 0.0
    yield_: float = 0.0
    yield_redemption_date: int = 0  # YYYYMMDD


@dataclass
class ScannerSubscription:
    """Parameters of a market scanner request."""

    number_of_rows: int = NO_ROW_NUMBER_SPECIFIED
    instrument: str = ""
    location_code: str = ""
    scan_code: str = ""
    above_price: float = UNSET_DOUBLE
    below_price: float = UNSET_DOUBLE
    above_volume: int = UNSET_INTEGER
    market_cap_above: float = UNSET_DOUBLE
    market_cap_below: float = UNSET_DOUBLE
    moody_rating_above: str = ""
    moody_rating_below: str = ""
    sp_rating_above: str = ""
    sp_rating_below: str = ""
    maturity_date_above: str = ""
    maturity_date_below: str = ""
    coupon_rate_above: float = UNSET_DOUBLE
    coupon_rate_below: float = UNSET_DOUBLE
    exclude_convertible: int = UNSET_INTEGER
    average_option_volume_above: int = UNSET_INTEGER
    scanner_setting_pairs: str = ""
    stock_type_filter: str = ""


@dataclass
class WshEventData:
    """A request for Wall Street Horizon event data."""

    con_id: int = UNSET_INTEGER
    filter: str = ""
    fill_watchlist: bool = False
    fill_portfolio: bool = False
    fill_competitors: bool = False
    start_date: str = ""
    end_date: str = ""
    total_limit: int = UNSET_INTEGER

    @classmethod
    def for_contract(
        cls,
        con_id,
        fill_watchlist,
        fill_portfolio,
        fill_competitors,
        start_date,
        end_date,
        total_limit,
    ) -> "WshEventData":
        """Build a request keyed by contract id, with no filter."""
        return cls(
            con_id=con_id,
            filter="",
            fill_watchlist=fill_watchlist,
            fill_portfolio=fill_portfolio,
            fill_competitors=fill_competitors,
            start_date=start_date,
            end_date=end_date,
            total_limit=total_limit,
        )

    @classmethod
    def for_filter(
        cls,
        filter,
        fill_watchlist,
        fill_portfolio,
        fill_competitors,
        start_date,
        end_date,
        total_limit,
    ) -> "WshEventData":
        """Build a request keyed by a filter expression, with no contract id."""
        return cls(
            con_id=UNSET_INTEGER,
            filter=filter,
            fill_watchlist=fill_watchlist,
            fill_portfolio=fill_portfolio,
            fill_competitors=fill_competitors,
            start_date=start_date,
            end_date=end_date,
            total_limit=total_limit,
        )