"""Connection-side handling of the option chain: requests out, callbacks in."""

from __future__ import annotations

import itertools
import logging
import os
import threading
from typing import Iterable, Optional, Protocol

from .contract import Contract, ContractDetails, MarketDataType
from .market import TickAttrib, TickType
from .option_chain import CALL, PUT, UNDERLYING_TICKER_ID, OptionChainManager

logger = logging.getLogger("optchain")

DELAYED_DATA_TYPE = int(MarketDataType.DELAYED)
FUTURES_CODE = "FUT"
FUTURES_OPTION_CODE = "FOP"
DEFAULT_EXCHANGE = "CME"
DEFAULT_CURRENCY = "USD"
PORT_LIVE = 7497
PORT_PAPER = 7496


class MessageClient(Protocol):
    """The socket client the wrapper sends requests through.

    ``wait_and_dispatch`` blocks until messages arrive (or ``wake`` is
    called) and delivers them as callbacks on the wrapper.
    """

    def connect(self, host: str, port: int, client_id: int) -> bool: ...

    def disconnect(self) -> None: ...

    def wait_and_dispatch(self) -> None: ...

    def wake(self) -> None: ...

    def req_contract_details(self, req_id: int, contract: Contract) -> None: ...

    def req_sec_def_opt_params(
        self, req_id: int, symbol: str, exchange: str, sec_type: str, con_id: int
    ) -> None: ...

    def req_market_data_type(self, market_data_type: int) -> None: ...

    def req_mkt_data(self, ticker_id: int, contract: Contract) -> None: ...

    def cancel_mkt_data(self, ticker_id: int) -> None: ...


class _IdSequence:
    """Thread-safe counter handing out increasing ids."""

    def __init__(self, start: int = 1) -> None:
        self._ids = itertools.count(start)
        self._lock = threading.Lock()

    def __call__(self) -> int:
        with self._lock:
            return next(self._ids)


class ChainWrapper:
    """Sends option chain requests and routes the server's callbacks to the manager."""

    def __init__(
        self,
        client: MessageClient,
        manager: Optional[OptionChainManager] = None,
        selected_symbol: str = "",
    ) -> None:
        self.client = client
        if manager is None:
            manager = OptionChainManager(requester=self)
        elif manager.requester is None:
            manager.requester = self
        self.manager = manager
        self.selected_symbol = selected_symbol
        self.max_threads = os.cpu_count() or 1
        self._req_ids = _IdSequence()
        self._ticker_ids = _IdSequence()

    # -- connection ------------------------------------------------------

    def connect(self, host: str, port: int, client_id: int = 0) -> bool:
        """Connect to the server; return whether it succeeded."""
        where = f"{host}:{port} clientId:{client_id}"
        logger.info("Connecting to %s", where)
        connected = bool(self.client.connect(host, port, client_id))
        if connected:
            logger.info("Connected to %s", where)
        else:
            logger.info("Cannot connect to %s", where)
        return connected

    def disconnect(self) -> None:
        """Close the connection."""
        self.client.disconnect()
        logger.info("Disconnected")

    def cancel_market_data(self) -> None:
        """Cancel market data for the underlying and every option in the chain."""
        self.client.cancel_mkt_data(UNDERLYING_TICKER_ID)
        for key in self.manager.option_chain:
            self.client.cancel_mkt_data(self.manager.pair_to_ticker(key))
        logger.info("Cancelled all market data requests")

    def process_messages(self) -> None:
        """Wait for incoming messages and dispatch them."""
        self.client.wait_and_dispatch()

    # -- requests --------------------------------------------------------

    def request_contract_details(self, contract: Contract) -> None:
        """Ask for the details of a contract."""
        req_id = self.next_req_id()
        logger.info(
            "ReqID: %d - Requesting contract details for %s Strike %.6f Right: %s",
            req_id,
            contract.symbol,
            contract.strike,
            contract.right,
        )
        self.client.req_contract_details(req_id, contract)

    def request_option_chain(self, symbol, exchange, sec_type, currency, contract_date) -> None:
        """Resolve the underlying contract, then ask for its option chain."""
        self.manager.set_underlying_contract(symbol, exchange, sec_type, currency, contract_date)
        self.request_contract_details(self.manager.underlying_contract)
        self.process_messages()

        req_id = self.next_req_id()
        con_id = self.manager.underlying_contract_id
        logger.info("ReqID: %d - Requesting option chain for: %d", req_id, con_id)
        self.client.req_sec_def_opt_params(req_id, symbol, exchange, sec_type, con_id)

    def request_delayed_data_type(self) -> None:
        """Switch market data to the delayed feed."""
        logger.info("Requesting delayed data type")
        self.client.req_market_data_type(DELAYED_DATA_TYPE)

    def request_underlying_market_data(self) -> None:
        """Ask for delayed market data on the underlying contract."""
        self.client.req_market_data_type(DELAYED_DATA_TYPE)
        self.client.req_mkt_data(UNDERLYING_TICKER_ID, self.manager.underlying_contract)

    def request_market_data(self) -> None:
        """Ask for market data on the calls and puts of every strike shown."""
        chain = self.manager.option_chain
        for strike in sorted(self.manager.active_strikes):
            for right in (CALL, PUT):
                ticker_id = self.manager.pair_to_ticker((strike, right))
                contract = chain[(strike, right)].contract_details.contract
                self.client.req_mkt_data(ticker_id, contract)
                logger.info(
                    "ReqID: %d - Requesting market data for %d", ticker_id, contract.con_id
                )

    def next_req_id(self) -> int:
        """Return a fresh request id."""
        return self._req_ids()

    def next_ticker_id(self) -> int:
        """Return a fresh ticker id."""
        return self._ticker_ids()

    # -- callbacks -------------------------------------------------------

    def contract_details(self, req_id: int, details: ContractDetails) -> None:
        """Store contract details that belong to the selected symbol."""
        contract = details.contract
        if contract.trading_class != self.selected_symbol:
            return
        logger.info(
            "ReqID: %d - Received contract details for %s, Contract ID: %d Trading Class: %s"
            " Strike: %.6f Right: %s Last Trade Date: %s",
            req_id,
            contract.symbol,
            contract.con_id,
            contract.trading_class,
            contract.strike,
            contract.right,
            contract.last_trade_date_or_contract_month,
        )
        if contract.sec_type == FUTURES_CODE:
            self.manager.set_underlying_contract_details(details)
        elif contract.sec_type == FUTURES_OPTION_CODE:
            self.manager.set_contract_details(details)
            self.manager.increment_init_callback_count()

    def error(self, id: int, error_code: int, error_string: str, advanced_order_reject_json: str = "") -> None:
        """Record an error or status notice from the server."""
        logger.info("Error. Id: %d, Code: %d, Msg: %s", id, error_code, error_string)

    def market_data_type(self, req_id: int, market_data_type: int) -> None:
        """Record the market data type the server switched to."""
        logger.info("MarketDataType. ReqId: %d, Type: %d", req_id, market_data_type)

    def security_definition_optional_parameter(
        self,
        req_id: int,
        exchange: str,
        underlying_con_id: int,
        trading_class: str,
        multiplier: str,
        expirations: Iterable[str],
        strikes: Iterable[float],
    ) -> None:
        """Build the chain from the strikes of the selected symbol."""
        if trading_class != self.selected_symbol:
            return
        logger.info("ReqID: %d - Received option chain for %d", req_id, underlying_con_id)
        self.manager.initialize_chain(strikes)

    def tick_price(self, ticker_id: int, field: int, price: float, attrib: Optional[TickAttrib] = None) -> None:
        """Apply a delayed bid, ask or last price to the chain."""
        logger.info("Tick Price. Ticker Id: %d, Field: %d, Price: %.6f", ticker_id, int(field), price)
        updates = {
            TickType.DELAYED_BID: self.manager.update_bid,
            TickType.DELAYED_ASK: self.manager.update_ask,
            TickType.DELAYED_LAST: self.manager.update_last,
        }
        update = updates.get(field)
        if update is not None:
            update(ticker_id, price)