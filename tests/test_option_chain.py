import pytest

from optchain.contract import Contract, ContractDetails
from optchain.option_chain import OptionChainManager, OptionData
from optchain.table import COLUMN_WIDTH, Column, Table, format_number2


class FakeRequester:
    def __init__(self, underlying_price):
        self.underlying_price = underlying_price
        self.manager = None
        self.pending = []
        self.requested = []
        self.underlying_requested = False

    def request_contract_details(self, contract):
        self.requested.append((contract.strike, contract.right))
        self.pending.append(contract)

    def process_messages(self):
        while self.pending:
            contract = self.pending.pop(0)
            details = ContractDetails(
                contract=Contract(
                    con_id=1000 + len(self.pending),
                    symbol=contract.symbol,
                    strike=contract.strike,
                    right=contract.right,
                    sec_type=contract.sec_type,
                    trading_class=contract.symbol,
                )
            )
            self.manager.set_contract_details(details)
            self.manager.increment_init_callback_count()
        if self.underlying_requested:
            self.manager.update_last(0, self.underlying_price)

    def request_underlying_market_data(self):
        self.underlying_requested = True


STRIKES = {100.0, 110.0, 120.0}


def build(strikes=STRIKES, price=111.0):
    requester = FakeRequester(price)
    manager = OptionChainManager(table=Table(use_curses=False), requester=requester)
    requester.manager = manager
    manager.set_underlying_contract("ES", "CME", "FUT", "USD", "20241220")
    manager.initialize_chain(strikes)
    return manager, requester


def cell(table, row, column):
    start = column * COLUMN_WIDTH
    return table.body[row][start:start + COLUMN_WIDTH].strip()


def test_ticker_ids_alternate_call_put_in_strike_order():
    manager, _ = build()
    assert manager.pair_to_ticker((100.0, "C")) == 1
    assert manager.pair_to_ticker((100.0, "P")) == 2
    assert manager.pair_to_ticker((110.0, "C")) == 3
    assert manager.pair_to_ticker((120.0, "P")) == 6


def test_initialize_requests_every_contract_and_marks_initialized():
    manager, requester = build()
    assert manager.is_initialized is True
    assert manager.contract_count == 6
    assert manager.init_callback_count == manager.contract_count
    assert sorted(requester.requested) == sorted(
        (strike, right) for strike in STRIKES for right in ("C", "P")
    )
    assert manager.underlying_last == 111.0


def test_option_contracts_copy_underlying_fields():
    manager, _ = build()
    contract = manager.get_contract(110.0, "P")
    assert contract.symbol == "ES"
    assert contract.sec_type == "FOP"
    assert contract.right == "P"
    assert contract.strike == 110.0


def test_get_contract_returns_copy():
    manager, _ = build()
    contract = manager.get_contract(100.0, "C")
    contract.symbol = "changed"
    assert manager.get_contract(100.0, "C").symbol == "ES"


def test_get_contract_unknown_raises():
    manager, _ = build()
    with pytest.raises(KeyError):
        manager.get_contract(105.0, "C")


def test_closest_strike_in_active_strikes():
    manager, _ = build(price=111.0)
    active = manager.active_strikes
    assert set(active) == STRIKES
    assert active[110.0] < active[120.0]
    assert active[100.0] < active[110.0]


@pytest.mark.parametrize(
    "price, expected",
    [(104.0, 100.0), (106.0, 110.0), (105.0, 100.0), (90.0, 100.0), (130.0, 120.0), (110.0, 110.0)],
)
def test_find_closest_strike(price, expected):
    manager, _ = build()
    assert manager.find_closest_strike(price) == expected


def test_find_closest_strike_without_strikes():
    manager = OptionChainManager(table=Table(use_curses=False))
    with pytest.raises(ValueError):
        manager.find_closest_strike(100.0)


def test_initialize_without_requester_raises():
    manager = OptionChainManager(table=Table(use_curses=False))
    with pytest.raises(RuntimeError):
        manager.initialize_chain(STRIKES)


def test_call_bid_update_is_stored_and_drawn():
    manager, _ = build()
    ticker = manager.pair_to_ticker((110.0, "C"))
    manager.update_bid(ticker, 2.5)
    assert manager.get_bid(ticker) == 2.5
    row = manager.table.get_row_index(110.0)
    assert cell(manager.table, row, Column.CALL_BID) == format_number2(2.5)
    assert cell(manager.table, row, Column.PUT_BID) == ""


def test_put_ask_and_last_updates_are_drawn_in_put_columns():
    manager, _ = build()
    ticker = manager.pair_to_ticker((120.0, "P"))
    manager.update_ask(ticker, 7.25)
    manager.update_last(ticker, 7.0)
    row = manager.table.get_row_index(120.0)
    assert manager.get_ask(ticker) == 7.25
    assert manager.get_last(ticker) == 7.0
    assert cell(manager.table, row, Column.PUT_ASK) == format_number2(7.25)
    assert cell(manager.table, row, Column.PUT_LAST) == format_number2(7.0)


def test_underlying_updates_use_ticker_zero():
    manager, _ = build()
    body_before = list(manager.table.body)
    manager.update_bid(0, 5000.25)
    manager.update_ask(0, 5000.5)
    assert manager.get_bid(0) == 5000.25
    assert manager.get_ask(0) == 5000.5
    assert manager.table.body == body_before


def test_unknown_ticker_raises():
    manager, _ = build()
    with pytest.raises(KeyError):
        manager.update_bid(99, 1.0)
    with pytest.raises(KeyError):
        manager.get_last(99)
    with pytest.raises(KeyError):
        manager.pair_to_ticker((105.0, "C"))


def test_set_contract_details_replaces_details():
    manager, _ = build()
    details = ContractDetails(contract=Contract(con_id=42, strike=100.0, right="C", symbol="ES"))
    manager.set_contract_details(details)
    assert manager.get_contract(100.0, "C").con_id == 42
    assert manager.option_chain[(100.0, "C")].contract_details is details


def test_set_contract_details_unknown_option_raises():
    manager, _ = build()
    details = ContractDetails(contract=Contract(strike=105.0, right="C"))
    with pytest.raises(KeyError):
        manager.set_contract_details(details)


def test_underlying_contract_and_id():
    manager = OptionChainManager(table=Table(use_curses=False))
    manager.set_underlying_contract("NQ", "CME", "FUT", "USD", "20250321")
    contract = manager.underlying_contract
    assert (contract.symbol, contract.exchange, contract.sec_type, contract.currency) == (
        "NQ",
        "CME",
        "FUT",
        "USD",
    )
    assert contract.last_trade_date_or_contract_month == "20250321"
    manager.set_underlying_contract_details(ContractDetails(contract=Contract(con_id=7, symbol="NQ")))
    assert manager.underlying_contract_id == 7


def test_option_data_defaults_to_zero_prices():
    data = OptionData()
    assert (data.bid, data.ask, data.last) == (0.0, 0.0, 0.0)


def test_option_chain_view_is_read_only():
    manager, _ = build()
    with pytest.raises(TypeError):
        manager.option_chain[(130.0, "C")] = OptionData()
    assert len(manager.option_chain) == 6