import io

import pytest

from pairbacktest.rep_tester import Tester, format_throughput


def test_add_time_tracks_min_max_and_totals():
    tester = Tester(try_for_time=1.0, cpu_freq=1000)
    for elapsed in (50, 30, 70, 40):
        tester.add_time(elapsed)
    assert tester.min_time == 30
    assert tester.max_time == 70
    assert tester.total_time == 50 + 30 + 70 + 40
    assert tester.total_count == 4


def test_new_minimum_resets_time_since_update():
    tester = Tester(try_for_time=1.0, cpu_freq=1000)
    tester.add_time(50)
    tester.add_time(60)
    tester.add_time(70)
    assert tester.time_since_last_update == 60 + 70
    tester.add_time(10)
    assert tester.time_since_last_update == 0


def test_should_test_stops_after_try_time_without_new_minimum():
    tester = Tester(try_for_time=0.1, cpu_freq=1000)
    tester.add_time(10)
    assert tester.should_test()
    tester.add_time(100)
    assert tester.should_test()
    tester.add_time(20)
    assert not tester.should_test()


def test_format_throughput_one_megabyte_per_second():
    assert format_throughput(1.0, 1024 * 1024) == "   1.000mb at 0.00gb/s "


def test_format_throughput_one_gigabyte_per_second():
    text = format_throughput(1.0, 1024**3)
    assert text.endswith("at 1.00gb/s ")


def test_format_result_layout():
    tester = Tester(try_for_time=1.0, cpu_freq=1000)
    tester.add_time(2)
    tester.add_time(4)
    text = tester.format_result("parse", 1024 * 1024)
    lines = text.splitlines()
    assert lines[0] == "---- parse ----"
    assert lines[1] == "Min time: 2.000000ms" + format_throughput(0.002, 1024 * 1024)
    assert lines[2] == "Avg time: 3.000000ms" + format_throughput(0.003, 1024 * 1024)
    assert lines[3] == "Max time: 4.000000ms" + format_throughput(0.004, 1024 * 1024)
    assert len(lines) == 4


def test_print_result_matches_format_result():
    tester = Tester(try_for_time=1.0, cpu_freq=1000)
    tester.add_time(5)
    out = io.StringIO()
    tester.print_result("load", 4096, out)
    assert out.getvalue() == tester.format_result("load", 4096)


@pytest.mark.parametrize("elapsed", [1, 1000, 123456])
def test_single_run_min_equals_max(elapsed):
    tester = Tester(try_for_time=1.0, cpu_freq=1000)
    tester.add_time(elapsed)
    assert tester.min_time == tester.max_time == tester.total_time == elapsed