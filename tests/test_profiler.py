import io

from pairbacktest.profiler import Anchor, Profiler, format_anchor


def fake_clock(*ticks):
    return iter(ticks).__next__


def test_nested_blocks_split_exclusive_time():
    profiler = Profiler(clock=fake_clock(0, 10, 40, 100))
    with profiler.time_block("outer"):
        with profiler.time_block("inner"):
            pass
    outer = profiler.anchors["outer"]
    inner = profiler.anchors["inner"]
    assert outer.elapsed_inclusive == 100
    assert inner.elapsed_inclusive == inner.elapsed_exclusive == 30
    assert outer.elapsed_inclusive == outer.elapsed_exclusive + inner.elapsed_inclusive
    assert outer.hit_count == inner.hit_count == 1


def test_recursive_block_is_not_double_counted():
    profiler = Profiler(clock=fake_clock(0, 10, 40, 100))
    with profiler.time_block("f"):
        with profiler.time_block("f"):
            pass
    anchor = profiler.anchors["f"]
    assert anchor.elapsed_inclusive == 100
    assert anchor.elapsed_exclusive == 100
    assert anchor.hit_count == 2


def test_processed_data_accumulates():
    profiler = Profiler(clock=fake_clock(0, 5, 10, 20))
    for _ in range(2):
        with profiler.time_block("read", 512):
            pass
    anchor = profiler.anchors["read"]
    assert anchor.processed_data == 1024
    assert anchor.elapsed_inclusive == 15


def test_time_function_uses_function_name_and_returns_value():
    profiler = Profiler(clock=fake_clock(3, 9))

    @profiler.time_function
    def compute(x, y):
        return x + y

    assert compute(2, 5) == 7
    assert compute.__name__ == "compute"
    assert profiler.anchors["compute"].elapsed_inclusive == 6


def test_block_records_time_when_exception_raised():
    profiler = Profiler(clock=fake_clock(0, 25))
    try:
        with profiler.time_block("fails"):
            raise ValueError("boom")
    except ValueError:
        pass
    assert profiler.anchors["fails"].elapsed_inclusive == 25


def test_format_anchor_plain():
    anchor = Anchor("f", hit_count=2, elapsed_exclusive=50, elapsed_inclusive=50)
    assert format_anchor(100, anchor, 1000) == "   f[2]: 50 (50.000000ms) (50.00%)"


def test_format_anchor_with_children_and_throughput():
    anchor = Anchor(
        "g", hit_count=1, processed_data=1024 * 1024,
        elapsed_exclusive=20, elapsed_inclusive=80,
    )
    text = format_anchor(100, anchor, 1000)
    assert text.startswith("   g[1]: 20 ")
    assert "w/children" in text
    assert "1.000mb at" in text
    assert text.endswith("gb/s)")


def test_report_skips_untimed_anchors():
    profiler = Profiler(clock=fake_clock(0, 10))
    profiler.anchors["idle"] = Anchor("idle")
    with profiler.time_block("busy"):
        pass
    lines = profiler.report(10, 1000)
    assert lines == [format_anchor(10, profiler.anchors["busy"], 1000)]


def test_end_and_print_writes_total_and_anchors():
    profiler = Profiler(clock=fake_clock(0, 10, 60, 100), cpu_freq=1000)
    profiler.start()
    with profiler.time_block("work"):
        pass
    out = io.StringIO()
    profiler.end_and_print(out)
    text = out.getvalue()
    assert "Total time: 100ms (CPU freq 1000)" in text
    assert format_anchor(100, profiler.anchors["work"], 1000) in text.splitlines()
    assert profiler.end_tsc - profiler.start_tsc == 100


def test_end_and_print_without_frequency_omits_total():
    profiler = Profiler(clock=fake_clock(0, 1, 2, 3), cpu_freq=0)
    profiler.start()
    with profiler.time_block("x"):
        pass
    out = io.StringIO()
    profiler.end_and_print(out)
    assert "Total time" not in out.getvalue()
    assert out.getvalue().startswith("   x[1]: 1 ")