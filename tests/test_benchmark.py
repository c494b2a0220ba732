"""Smoke test for the benchmark script."""

from scripts.benchmark import COMPLEX_CONFIG, TEST_DATA, build_query_by_hand, format_report, main, run

from confquery import compile_query


def test_hand_written_baseline_matches_builder():
    assert build_query_by_hand(TEST_DATA) == compile_query(COMPLEX_CONFIG, TEST_DATA)


def test_run_and_report():
    results = run(iterations=5, warmup=1)
    assert len(results) == 4
    report = format_report(results, 5)
    assert "| Complex: compile_query |" in report


def test_main_writes_report(tmp_path, capsys):
    output = tmp_path / "out" / "benchmark.md"
    main(["--iterations", "3", "--warmup", "1", "--output", str(output)])
    assert output.read_text(encoding="utf-8").startswith("# confquery benchmark")
    assert "Report written" in capsys.readouterr().out
