import threading
import time
from collections import deque

import pytest

from optchain import app
from optchain.app import run_session
from optchain.contract import Contract, ContractDetails
from optchain.market import TickAttrib, TickType
from optchain.option_chain import OptionChainManager
from optchain.table import Table
from optchain.wrapper import ChainWrapper, PORT_LIVE

STRIKES = (4000.0, 4050.0, 4100.0)


class ThreadedClient:
    def __init__(self, accept=True, symbol="ES"):
        self.wrapper = None
        self.accept = accept
        self.symbol = symbol
        self.queue = deque()
        self.calls = []
        self.woken = False
        self.cond = threading.Condition()
        self.option_id = 1000

    def _push(self, callback):
        with self.cond:
            self.queue.append(callback)
            self.cond.notify()

    def connect(self, host, port, client_id):
        self.calls.append(("connect", host, port, client_id))
        if self.accept:
            self._push(lambda: self.wrapper.error(-1, 2104, "farm ok", ""))
        return self.accept

    def disconnect(self):
        self.calls.append(("disconnect",))

    def wait_and_dispatch(self):
        with self.cond:
            ready = self.cond.wait_for(lambda: self.queue or self.woken, timeout=5)
            if not ready:
                raise AssertionError("no pending messages")
            if not self.queue:
                return
            callback = self.queue.popleft()
        callback()

    def wake(self):
        with self.cond:
            self.woken = True
            self.cond.notify_all()

    def req_contract_details(self, req_id, contract):
        self.calls.append(("details", req_id))
        if contract.sec_type == "FUT":
            details = ContractDetails(
                contract=Contract(con_id=555, symbol=contract.symbol, sec_type="FUT", trading_class=self.symbol)
            )
        else:
            self.option_id += 1
            details = ContractDetails(
                contract=Contract(
                    con_id=self.option_id,
                    symbol=contract.symbol,
                    sec_type="FOP",
                    strike=contract.strike,
                    right=contract.right,
                    trading_class=self.symbol,
                )
            )
        self._push(lambda: self.wrapper.contract_details(req_id, details))

    def req_sec_def_opt_params(self, req_id, symbol, exchange, sec_type, con_id):
        self.calls.append(("secdef", symbol, exchange, sec_type, con_id))
        self._push(
            lambda: self.wrapper.security_definition_optional_parameter(
                req_id, exchange, con_id, self.symbol, "50", {"20241220"}, set(STRIKES)
            )
        )

    def req_market_data_type(self, market_data_type):
        self.calls.append(("type", market_data_type))

    def req_mkt_data(self, ticker_id, contract):
        self.calls.append(("mkt", ticker_id))
        if ticker_id == 0:
            self._push(lambda: self.wrapper.tick_price(0, TickType.DELAYED_LAST, 4060.0, TickAttrib()))

    def cancel_mkt_data(self, ticker_id):
        self.calls.append(("cancel", ticker_id))


@pytest.fixture(autouse=True)
def no_settle_delay(monkeypatch):
    monkeypatch.setattr(app, "SETTLE_SECONDS", 0.0)


def build(accept=True):
    client = ThreadedClient(accept=accept)
    manager = OptionChainManager(table=Table(use_curses=False))
    wrapper = ChainWrapper(client, manager)
    wrapper.max_threads = 2
    client.wrapper = wrapper
    return client, manager, wrapper


def test_missing_host_raises():
    client, _, wrapper = build()
    with pytest.raises(ConnectionError):
        run_session(wrapper, "", "ES", "20241220", lambda: None)
    assert client.calls == []


def test_refused_connection_raises():
    client, _, wrapper = build(accept=False)
    with pytest.raises(ConnectionError):
        run_session(wrapper, "10.0.0.1", "ES", "20241220", lambda: None)
    assert client.calls == [("connect", "10.0.0.1", PORT_LIVE, 1)]


def test_full_session(capsys):
    client, manager, wrapper = build()
    run_session(wrapper, "10.0.0.1", "ES", "20241220", lambda: None)

    assert manager.is_initialized
    assert wrapper.selected_symbol == "ES"
    assert ("secdef", "ES", "CME", "FUT", 555) in client.calls
    requested = {call[1] for call in client.calls if call[0] == "mkt"}
    tickers = {manager.pair_to_ticker(key) for key in manager.option_chain}
    assert requested == {0} | tickers
    cancelled = {call[1] for call in client.calls if call[0] == "cancel"}
    assert cancelled == {0} | tickers
    assert client.calls[-1] == ("disconnect",)
    out = capsys.readouterr().out
    assert out.startswith("Loading...")
    assert out.endswith("disconnected\n")


def test_workers_process_ticks_until_quit():
    client, manager, wrapper = build()
    seen = {}

    def wait_for_quit():
        ticker = manager.pair_to_ticker((4100.0, "P"))
        client._push(lambda: wrapper.tick_price(ticker, TickType.DELAYED_ASK, 2.5, TickAttrib()))
        deadline = time.monotonic() + 5
        while manager.get_ask(ticker) != 2.5 and time.monotonic() < deadline:
            time.sleep(0.01)
        seen["ask"] = manager.get_ask(ticker)

    run_session(wrapper, "10.0.0.1", "ES", "20241220", wait_for_quit)
    assert seen["ask"] == 2.5
    assert client.calls[-1] == ("disconnect",)