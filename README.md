# pairbacktest

Groundwork for a pair-trading backtest: load daily OHLC price data from a
CSV file into typed columns, and measure how long the work takes.

## Installing

```
pip install .
```

For running the tests:

```
pip install .[test]
pytest
```

## Command line

```
pairbacktest [PATH] [--column {unix,open,high,low,close}]
```

Reads the price file at `PATH` (by default `data/Bitfinex_ETHUSD_d.csv`),
loads the `unix`, `open`, `high`, `low` and `close` columns and prints every
value of the chosen column (`open` unless `--column` says otherwise), one per
line. If the file cannot be opened or parsed, or has no such column, a message
goes to standard error and the command exits with status 1.

## Loading columns

`pairbacktest.csv_parser.load_csv(path, fields)` reads only the columns named
in `fields`, each with its own `ColumnType` (`INT32`, `INT64`, `UINT32`,
`UINT64`, `FLOAT32`, `FLOAT64`):

```python
from pairbacktest.csv_parser import ColumnType, load_csv

columns = load_csv(
    "data/Bitfinex_ETHUSD_d.csv",
    {"unix": ColumnType.INT64, "open": ColumnType.FLOAT64, "close": ColumnType.FLOAT64},
)

opens = columns["open"].values_as(ColumnType.FLOAT64)
```

- The first line is the header; every following newline-terminated line is a
  row. Text after the last newline is ignored.
- Header names are compared after truncation to 63 characters. Columns named
  in `fields` but missing from the header are missing from the result.
- A `Column` holds its `type` and its `values` as an `array.array`; `size`
  and `len()` give the row count. `values_as(column_type)` raises
  `ColumnTypeError` when asked for the wrong type.
- `parse_value(column_type, text)` converts a single token. It reads the
  leading number and ignores anything after it; it raises `ValueError` when no
  number starts the text or an integer is out of range for its type.
  `FLOAT32` values are rounded to single precision.
- `load_csv` raises `ValueError` for an empty file, a row that is missing a
  selected value, or a token that does not parse.

## Profiling

`pairbacktest.profiler.Profiler` times named, possibly nested blocks, keeping
exclusive and inclusive time per label, hit counts and optional throughput:

```python
from pairbacktest.profiler import Profiler

profiler = Profiler()
profiler.start()

with profiler.time_block("load", processed_data=file_size):
    ...

profiler.end_and_print()
```

- `time_function(func)` wraps a function so that every call is timed under
  its name.
- `report(total_elapsed, cpu_freq)` returns the report lines for every label
  that recorded time; `format_anchor` renders one `Anchor`.
- `end_and_print(out=None)` writes the total time and the report to `out`
  (standard output by default). Unless the profiler was given a `cpu_freq`,
  it first estimates the counter rate, which busy-waits for one second.
- A custom tick source can be passed as `clock`.

`pairbacktest.timer` offers `read_os_timer()` (wall clock in microseconds),
`read_cpu_timer()` (a monotonic nanosecond counter) and
`estimate_cpu_freq(ms)`, which busy-waits `ms` milliseconds and returns the
counter's ticks per second.

## Repetition testing

`pairbacktest.rep_tester.Tester(try_for_time, cpu_freq)` collects repeated
timings of one piece of work with `add_time(elapsed)`, tracking minimum,
maximum and total. `should_test()` stays true while less than `try_for_time`
seconds of runs have passed since the last new minimum. `format_result` and
`print_result` report minimum, average and maximum time with throughput;
`format_throughput(seconds, size)` renders a size and rate on its own.

## What it does not do

There is no backtest yet: the package loads price columns and times code, but
has no pair selection, signals, trade simulation or performance reporting.