"""Book-keeping for one option chain: contracts, ticker ids and live prices."""

from __future__ import annotations

import copy
import logging
import threading
from bisect import bisect_left
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Protocol

from .contract import Contract, ContractDetails
from .table import Column, Table, format_number2

logger = logging.getLogger("optchain")

UNDERLYING_TICKER_ID = 0
CALL = "C"
PUT = "P"
OPTION_SEC_TYPE = "FOP"

OptionKey = tuple[float, str]


class ChainRequester(Protocol):
    """What the manager needs from the connection while building the chain."""

    def request_contract_details(self, contract: Contract) -> None: ...

    def process_messages(self) -> None: ...

    def request_underlying_market_data(self) -> None: ...


@dataclass
class OptionData:
    """Prices and contract details of one option in the chain."""

    bid: float = 0.0
    ask: float = 0.0
    last: float = 0.0
    contract_details: ContractDetails = field(default_factory=ContractDetails)
    ticker_id: int = 0
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)


_PRICE_COLUMNS = {
    "bid": (Column.CALL_BID, Column.PUT_BID),
    "ask": (Column.CALL_ASK, Column.PUT_ASK),
    "last": (Column.CALL_LAST, Column.PUT_LAST),
}


class OptionChainManager:
    """Holds the option chain of one underlying contract and keeps the table current."""

    def __init__(
        self,
        table: Optional[Table] = None,
        requester: Optional[ChainRequester] = None,
    ) -> None:
        self.table = table if table is not None else Table()
        self.requester = requester
        self.is_initialized = False
        self._contract_count = 0
        self._init_callback_count = 0
        self._underlying_bid = 0.0
        self._underlying_ask = 0.0
        self._underlying_last = 0.0
        self._underlying_lock = threading.Lock()
        self._count_lock = threading.Lock()
        self._option_chain: dict[OptionKey, OptionData] = {}
        self._ticker_to_key: dict[int, OptionKey] = {}
        self._key_to_ticker: dict[OptionKey, int] = {}
        self._strikes: list[float] = []
        self._underlying_details = ContractDetails()

    # -- read-only views -------------------------------------------------

    @property
    def option_chain(self) -> Mapping[OptionKey, OptionData]:
        """The options of the chain keyed by (strike, right)."""
        return MappingProxyType(self._option_chain)

    @property
    def strikes(self) -> list[float]:
        """The strikes of the chain in ascending order."""
        return list(self._strikes)

    @property
    def active_strikes(self) -> dict[float, int]:
        """Strikes shown in the table mapped to their rows."""
        return dict(self.table.active_strikes)

    @property
    def underlying_contract(self) -> Contract:
        """A copy of the underlying contract."""
        return copy.deepcopy(self._underlying_details.contract)

    @property
    def underlying_contract_id(self) -> int:
        """The contract id of the underlying contract."""
        return self._underlying_details.contract.con_id

    @property
    def underlying_last(self) -> float:
        """The last traded price of the underlying contract."""
        return self.get_last(UNDERLYING_TICKER_ID)

    @property
    def contract_count(self) -> int:
        """Number of option contracts created so far."""
        return self._contract_count

    @property
    def init_callback_count(self) -> int:
        """Number of option contract details received so far."""
        return self._init_callback_count

    # -- set-up ----------------------------------------------------------

    def increment_init_callback_count(self) -> None:
        """Count one more option contract whose details have arrived."""
        with self._count_lock:
            self._init_callback_count += 1

    def initialize_chain(self, strikes: Iterable[float]) -> None:
        """Create calls and puts for every strike, wait for their details and draw the table."""
        if self.requester is None:
            raise RuntimeError("no connection to request the chain from")

        self._strikes = sorted(set(strikes))
        with self._underlying_lock:
            self._underlying_last = 0.0

        underlying = self._underlying_details.contract
        ticker_id = 1
        for strike in self._strikes:
            for right in (CALL, PUT):
                details = ContractDetails(
                    contract=Contract(
                        strike=strike,
                        right=right,
                        sec_type=OPTION_SEC_TYPE,
                        symbol=underlying.symbol,
                        last_trade_date_or_contract_month=underlying.last_trade_date_or_contract_month,
                    )
                )
                key = (strike, right)
                self._option_chain[key] = OptionData(contract_details=details, ticker_id=ticker_id)
                self._ticker_to_key[ticker_id] = key
                self._key_to_ticker[key] = ticker_id
                self._contract_count += 1
                ticker_id += 1

            for right in (CALL, PUT):
                self.requester.request_contract_details(
                    self._option_chain[(strike, right)].contract_details.contract
                )

        while self._init_callback_count != self._contract_count:
            self.requester.process_messages()

        self.requester.request_underlying_market_data()
        while self.underlying_last == 0:
            self.requester.process_messages()

        closest = self.find_closest_strike(self.underlying_last)
        self.table.initialize_table(self._strikes, closest)

        logger.info("Option chain initialized for symbol: %s", underlying.symbol)
        self.is_initialized = True

    def set_underlying_contract_details(self, details: ContractDetails) -> None:
        """Store the details of the underlying contract."""
        self._underlying_details = details

    def set_contract_details(self, details: ContractDetails) -> None:
        """Store the details of the option with the contract's strike and right."""
        key = (details.contract.strike, details.contract.right)
        try:
            option = self._option_chain[key]
        except KeyError:
            raise KeyError(f"no option with strike {key[0]!r} and right {key[1]!r}") from None
        option.contract_details = details

    def set_underlying_contract(self, symbol, exchange, sec_type, currency, contract_date) -> None:
        """Describe the underlying contract the chain belongs to."""
        contract = self._underlying_details.contract
        contract.symbol = symbol
        contract.exchange = exchange
        contract.sec_type = sec_type
        contract.currency = currency
        contract.last_trade_date_or_contract_month = contract_date

    # -- price updates ---------------------------------------------------

    def update_bid(self, ticker_id: int, bid: float) -> None:
        """Record a new bid price and show it in the table."""
        self._update(ticker_id, bid, "bid", "Bid")

    def update_ask(self, ticker_id: int, ask: float) -> None:
        """Record a new ask price and show it in the table."""
        self._update(ticker_id, ask, "ask", "Ask")

    def update_last(self, ticker_id: int, last: float) -> None:
        """Record a new last price and show it in the table."""
        self._update(ticker_id, last, "last", "Last")

    def _update(self, ticker_id: int, price: float, attr: str, label: str) -> None:
        if ticker_id == UNDERLYING_TICKER_ID:
            with self._underlying_lock:
                setattr(self, f"_underlying_{attr}", price)
            logger.info(
                "'%s' updated for underlying contract: %s",
                label,
                self._underlying_details.contract.symbol,
            )
            return

        key = self._key_for(ticker_id)
        option = self._option_chain[key]
        strike, right = key
        with option.lock:
            setattr(option, attr, price)
            logger.info(
                "'%s' updated for Ticker ID: %d Symbol: %s Strike: %.6f Type: %s",
                label,
                ticker_id,
                option.contract_details.contract.symbol,
                strike,
                right,
            )
            row = self.table.get_row_index(strike)
            if row is not None:
                call_column, put_column = _PRICE_COLUMNS[attr]
                column = call_column if right == CALL else put_column
                self.table.draw_cell(row, column, format_number2(price))

    # -- queries ---------------------------------------------------------

    def find_closest_strike(self, underlying_price: float) -> float:
        """Return the strike nearest the price; a tie goes to the lower strike."""
        if not self._strikes:
            raise ValueError("the chain has no strikes")
        position = bisect_left(self._strikes, underlying_price)
        if position == len(self._strikes):
            return self._strikes[-1]
        higher = self._strikes[position]
        if higher == underlying_price or position == 0:
            return higher
        lower = self._strikes[position - 1]
        if higher - underlying_price < underlying_price - lower:
            return higher
        return lower

    def get_bid(self, ticker_id: int) -> float:
        """Return the bid for a ticker id; 0 is the underlying."""
        return self._get(ticker_id, "bid")

    def get_ask(self, ticker_id: int) -> float:
        """Return the ask for a ticker id; 0 is the underlying."""
        return self._get(ticker_id, "ask")

    def get_last(self, ticker_id: int) -> float:
        """Return the last price for a ticker id; 0 is the underlying."""
        return self._get(ticker_id, "last")

    def _get(self, ticker_id: int, attr: str) -> float:
        if ticker_id == UNDERLYING_TICKER_ID:
            with self._underlying_lock:
                return getattr(self, f"_underlying_{attr}")
        option = self._option_chain[self._key_for(ticker_id)]
        with option.lock:
            return getattr(option, attr)

    def get_contract(self, strike: float, right: str) -> Contract:
        """Return a copy of the contract of the option with this strike and right."""
        try:
            option = self._option_chain[(strike, right)]
        except KeyError:
            raise KeyError(f"no option with strike {strike!r} and right {right!r}") from None
        return copy.deepcopy(option.contract_details.contract)

    def pair_to_ticker(self, key: OptionKey) -> int:
        """Return the ticker id of the option with this (strike, right)."""
        try:
            return self._key_to_ticker[tuple(key)]
        except KeyError:
            raise KeyError(f"no option for {key!r}") from None

    def _key_for(self, ticker_id: int) -> OptionKey:
        try:
            return self._ticker_to_key[ticker_id]
        except KeyError:
            raise KeyError(f"unknown ticker id {ticker_id}") from None