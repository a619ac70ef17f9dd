# optchain

`optchain` keeps track of a futures-option chain and shows it as a table in
the terminal. It works through a session in these steps:

1. It resolves the underlying future.
2. It collects the contract of every call and put in the chain.
3. It waits for the first last price of the underlying.
4. It centres a 33-row strike ladder on the strike closest to that price.
5. It writes delayed bid, ask and last quotes for calls and puts into the
   table until the caller says to stop.

The table has one header row and a footer that reads `Press 'q' to quit`:

```
  Bid    Ask    Last   Strike   Bid    Ask    Last
```

The three columns on the left are calls and the three on the right are puts.

## What is in the package

| Module | Purpose |
| --- | --- |
| `optchain.contract` | Holds the `Contract`, `ContractDetails`, `ComboLeg` and related records. It also has the `MarketDataType` and fund enums and `clone_combo_legs`. |
| `optchain.market` | Holds `TickType`, the tick attributes, bars, historical ticks and other market-data records. It also has `is_price`. |
| `optchain.errors` | Holds the client error codes as `CodeMsgPair` values and the `ClientError` exception. |
| `optchain.orders` | Holds the `Order`, `OrderState`, `Execution`, `CommissionReport`, `ScannerSubscription` and `WshEventData` records. |
| `optchain.utils` | Checks pegged order types and decodes fund asset and distribution codes. |
| `optchain.table` | Provides `format_number`, `format_number2` and `layout_strikes`. It also has the `Table` class, which draws the chain. |
| `optchain.terminal` | Provides `resize_terminal` and `get_default_gateway`, which reads `ip route`. It also has `parse_default_gateway` and the `prompt_symbol` and `prompt_expiry` prompts. |
| `optchain.option_chain` | Provides `OptionChainManager`, which holds the chain, its ticker ids and its prices, and keeps the table up to date. |
| `optchain.wrapper` | Provides `ChainWrapper`, which sends requests through a client and passes the server callbacks on to the manager. |
| `optchain.app` | Provides `run_session`, which runs one session from connect to disconnect. |

## Examples

Formatting numbers for the table:

```python
from optchain.table import format_number, format_number2

format_number(5900.0)    # "5900"   (strike column)
format_number(5902.5)    # "5902.5"
format_number2(12.25)    # "12.25"  (bid / ask / last columns)
```

Placing strikes on the rows around the middle of the table:

```python
from optchain.table import layout_strikes

rows = layout_strikes([5890.0, 5895.0, 5900.0, 5905.0], 5900.0)
# rows[5900.0] == 17, rows[5905.0] == 18, rows[5895.0] == 16, rows[5890.0] == 15
```

Finding the gateway in `ip route` output:

```python
from optchain.terminal import parse_default_gateway

parse_default_gateway("default via 192.168.1.1 dev eth0 proto dhcp\n")
# "192.168.1.1"
```

If the output has no gateway, `parse_default_gateway` raises `GatewayError`.

Prompting with your own input and output:

```python
import io
from optchain.terminal import prompt_symbol

answers = iter(["xx", "es"])
prompt_symbol(lambda: next(answers), io.StringIO(), io.StringIO())   # "ES"
```

The supported symbols are `ES` and `NQ`. The supported expiries are
`20241220` and `20250321`.

Recognising pegged order types and price ticks:

```python
from optchain.utils import is_peg_mid_order
from optchain.market import TickType, is_price

is_peg_mid_order("PEG MID")        # True
is_price(TickType.DELAYED_BID)     # True
is_price(TickType.VOLUME)          # False
```

Using the table without a terminal:

`Table(use_curses=False)` keeps the text of each window in its `header`,
`body` and `footer` lists and never takes over the screen.
`get_row_index` returns `None` for a strike that is not on screen.

## Running a session

`run_session(wrapper, host, symbol, expiry, wait_for_quit)` works as follows:

* It prints `Loading...`.
* It connects to `host` on port 7497 with client id 1. If `host` is empty or
  the connection fails, it raises `ConnectionError`.
* It asks for the option chain of `symbol` and `expiry` on CME in USD.
* It waits until the chain is built, then asks for market data on the strikes
  shown in the table.
* It dispatches incoming messages on a pool of worker threads, one per CPU,
  until `wait_for_quit` returns.
* It cancels every market-data subscription, disconnects and prints
  `disconnected`.

The underlying market data is requested as the delayed feed. Log lines go to
the standard `logging` logger named `optchain`.

## What the package does not do

* It has no command to start it. You call `run_session` from your own code.
* It does not include a client for the trading gateway's wire protocol.
  `ChainWrapper` takes any object that has the methods of the
  `optchain.wrapper.MessageClient` protocol: `connect`, `disconnect`,
  `wait_and_dispatch`, `wake`, `req_contract_details`,
  `req_sec_def_opt_params`, `req_market_data_type`, `req_mkt_data` and
  `cancel_mkt_data`. You must supply that object.
* It does not set up logging handlers or write a log file. Configure the
  `optchain` logger yourself if you want the log.
* The order, execution and scanner records are plain data. Nothing in the
  package places orders.

## Requirements

* Python 3.10 or newer, with no third-party dependencies.
* A terminal with curses support, for the drawn table.
* The `ip` command, for `get_default_gateway`.