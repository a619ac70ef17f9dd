"""Runs one viewing session: connect, build the chain, stream prices, shut down."""

from __future__ import annotations

import threading
import time
from typing import Callable

from .wrapper import (
    DEFAULT_CURRENCY,
    DEFAULT_EXCHANGE,
    FUTURES_CODE,
    PORT_LIVE,
    ChainWrapper,
)

CLIENT_ID = 1
SETTLE_SECONDS = 1.0


def _process_until_quit(wrapper: ChainWrapper, wait_for_quit: Callable[[], object]) -> None:
    threads = max(1, wrapper.max_threads)
    print(f"Using max threads: {threads}")
    stop = threading.Event()

    def worker() -> None:
        while not stop.is_set():
            wrapper.process_messages()

    pool = [threading.Thread(target=worker, daemon=True) for _ in range(threads)]
    for thread in pool:
        thread.start()
    try:
        wait_for_quit()
    finally:
        stop.set()
        wrapper.client.wake()
        for thread in pool:
            thread.join()


def run_session(wrapper: ChainWrapper, host: str, symbol: str, expiry: str, wait_for_quit) -> None:
    """Show the option chain of symbol/expiry until wait_for_quit returns.

    Raises ConnectionError if there is no host or the connection fails.
    """
    print("Loading...")
    if not host:
        raise ConnectionError("Failed to get default gateway")
    if not wrapper.connect(host, PORT_LIVE, CLIENT_ID):
        raise ConnectionError("Failed to connect")

    time.sleep(SETTLE_SECONDS)  # let the data farms report in
    wrapper.process_messages()

    wrapper.selected_symbol = symbol
    wrapper.request_option_chain(symbol, DEFAULT_EXCHANGE, FUTURES_CODE, DEFAULT_CURRENCY, expiry)
    while not wrapper.manager.is_initialized:
        wrapper.process_messages()

    wrapper.request_market_data()
    _process_until_quit(wrapper, wait_for_quit)
    wrapper.cancel_market_data()
    wrapper.disconnect()
    print("disconnected")