import sys

from optchain.contract import UNSET_INTEGER
from optchain.market import SoftDollarTier
from optchain.orders import (
    UNSET_DOUBLE,
    UNSET_LONG,
    AuctionStrategy,
    CommissionReport,
    Execution,
    ExecutionFilter,
    Order,
    OrderCancel,
    OrderComboLeg,
    OrderState,
    Origin,
    ScannerSubscription,
    UsePriceMgmtAlgo,
    WshEventData,
    clone_order_combo_legs,
)


def test_unset_double_is_largest_float():
    assert OrderComboLeg().price == sys.float_info.max


def test_order_defaults():
    order = Order()
    assert order.transmit is True
    assert order.exempt_code == -1
    assert order.lmt_price == UNSET_DOUBLE
    assert order.min_qty == UNSET_INTEGER
    assert order.parent_perm_id == UNSET_LONG
    assert order.origin is Origin.CUSTOMER
    assert order.auction_strategy == AuctionStrategy.AUCTION_UNSET
    assert order.use_price_mgmt_algo is UsePriceMgmtAlgo.DEFAULT
    assert order.soft_dollar_tier == SoftDollarTier("", "", "")
    assert order.total_quantity is None


def test_order_conditions_not_shared():
    first, second = Order(), Order()
    first.conditions.append("x")
    assert second.conditions == []


def test_use_price_mgmt_values():
    assert UsePriceMgmtAlgo(UNSET_INTEGER) is UsePriceMgmtAlgo.DEFAULT
    assert UsePriceMgmtAlgo(0) is UsePriceMgmtAlgo.DONT_USE
    assert UsePriceMgmtAlgo(1) is UsePriceMgmtAlgo.USE


def test_clone_order_combo_legs_copies_and_skips_none():
    legs = [OrderComboLeg(price=1.5), None, OrderComboLeg(price=2.5)]
    cloned = clone_order_combo_legs(legs)
    assert cloned == [OrderComboLeg(price=1.5), OrderComboLeg(price=2.5)]
    cloned[0].price = 9.0
    assert legs[0].price == 1.5


def test_clone_order_combo_legs_none():
    assert clone_order_combo_legs(None) is None


def test_order_state_and_cancel_defaults():
    state = OrderState()
    assert state.commission == UNSET_DOUBLE
    assert state.max_commission == UNSET_DOUBLE
    assert OrderCancel().manual_order_indicator == UNSET_INTEGER


def test_execution_and_filter_defaults():
    execution = Execution()
    assert execution.shares == 0
    assert execution.pending_price_revision is False
    assert ExecutionFilter().client_id == 0


def test_commission_report_fields():
    report = CommissionReport(exec_id="e1", commission=2.25, currency="USD")
    assert report.realized_pnl == 0
    assert (report.exec_id, report.currency) == ("e1", "USD")


def test_scanner_subscription_defaults():
    sub = ScannerSubscription()
    assert sub.number_of_rows == -1
    assert sub.above_price == UNSET_DOUBLE
    assert sub.above_volume == UNSET_INTEGER
    assert sub.exclude_convertible == UNSET_INTEGER


def test_wsh_event_data_for_contract():
    data = WshEventData.for_contract(8314, True, False, True, "20240101", "20240201", 10)
    assert data.con_id == 8314
    assert data.filter == ""
    assert data.fill_watchlist is True
    assert data.fill_portfolio is False
    assert data.total_limit == 10


def test_wsh_event_data_for_filter():
    data = WshEventData.for_filter("{}", False, True, False, "", "", 5)
    assert data.con_id == UNSET_INTEGER
    assert data.filter == "{}"
    assert data.fill_portfolio is True
    assert data.total_limit == 5