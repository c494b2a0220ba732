"""Benchmark script for the confquery query builder.

Measures compile throughput for:
- A complex configuration (static filters, mappings, date ranges, nested OR/AND)
- The same filter written by hand as plain dict construction
- A simple configuration (static filters and mappings only)
- Validation of the raw complex configuration

Usage:
    # Default run (10,000 iterations)
    python scripts/benchmark.py

    # Quick run
    python scripts/benchmark.py --iterations 1000

    # Write a markdown report
    python scripts/benchmark.py --output results/benchmark.md
"""

import argparse
import time
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

from dotenv import load_dotenv

from confquery import Operator, QueryConfig, and_, compile_query, field, or_, ref, validate_config

load_dotenv()

TEST_DATA: Dict[str, Any] = {
    "accountId": "acc-12345",
    "caseId": "case-67890",
    "status": "completed",
    "minPriority": 3,
    "encounterDate": {"from": datetime(2024, 1, 1), "to": datetime(2024, 12, 31)},
    "updatedAt": {"from": datetime(2024, 6, 1)},
}

RAW_COMPLEX_CONFIG: Dict[str, Any] = {
    "staticFilters": {"programGroup": "CMR", "deleted": False},
    "fieldMappings": {"accountId": "accountId", "caseId": "caseId"},
    "dateRanges": [
        {"field": "encounterDate"},
        {"field": "updatedAt"},
        {"field": "createdAt"},
        {"field": "completedAt"},
    ],
    "conditions": [
        or_(
            field("status", Operator.EQ, "completed"),
            and_(
                field("status", Operator.EQ, "in-progress"),
                field("priority", Operator.GTE, ref("minPriority")),
            ),
        ).model_dump(),
    ],
}

COMPLEX_CONFIG = validate_config(RAW_COMPLEX_CONFIG)

SIMPLE_CONFIG = QueryConfig(
    static_filters={"status": "active"},
    field_mappings={"accountId": "accountId", "caseId": "caseId"},
)

SIMPLE_DATA = {"accountId": "acc-123", "caseId": "case-456"}


def build_query_by_hand(data: Dict[str, Any]) -> Dict[str, Any]:
    """Hand-written equivalent of COMPLEX_CONFIG, used as the baseline."""
    query: Dict[str, Any] = {"programGroup": "CMR", "deleted": False}
    for key in ("accountId", "caseId"):
        if data.get(key) is not None:
            query[key] = data[key]
    for key in ("encounterDate", "updatedAt", "createdAt", "completedAt"):
        bounds = data.get(key) or {}
        range_query = {}
        if bounds.get("from") is not None:
            range_query["$gte"] = bounds["from"]
        if bounds.get("to") is not None:
            range_query["$lte"] = bounds["to"]
        if range_query:
            query[key] = range_query
    in_progress: List[Dict[str, Any]] = [{"status": "in-progress"}]
    if data.get("minPriority") is not None:
        in_progress.append({"priority": {"$gte": data["minPriority"]}})
    query["$or"] = [
        {"status": "completed"},
        in_progress[0] if len(in_progress) == 1 else {"$and": in_progress},
    ]
    return query


def time_it(fn: Callable[[], Any], iterations: int) -> float:
    """Return elapsed milliseconds for `iterations` calls of `fn`."""
    start = time.perf_counter()
    for _ in range(iterations):
        fn()
    return (time.perf_counter() - start) * 1000


def run(iterations: int, warmup: int) -> List[Tuple[str, float]]:
    cases: List[Tuple[str, Callable[[], Any]]] = [
        ("Complex: hand-written dict", lambda: build_query_by_hand(TEST_DATA)),
        ("Complex: compile_query", lambda: compile_query(COMPLEX_CONFIG, TEST_DATA)),
        ("Simple: compile_query", lambda: compile_query(SIMPLE_CONFIG, SIMPLE_DATA)),
        ("Complex: validate_config", lambda: validate_config(RAW_COMPLEX_CONFIG)),
    ]
    assert build_query_by_hand(TEST_DATA) == compile_query(COMPLEX_CONFIG, TEST_DATA)

    for _, fn in cases:
        time_it(fn, warmup)
    return [(name, time_it(fn, iterations)) for name, fn in cases]


def format_report(results: List[Tuple[str, float]], iterations: int) -> str:
    lines = [
        "# confquery benchmark",
        "",
        f"Iterations: {iterations:,}",
        "",
        "| Case | Total (ms) | ops/sec | µs/op |",
        "| --- | ---: | ---: | ---: |",
    ]
    for name, elapsed in results:
        ops = iterations / elapsed * 1000 if elapsed else float("inf")
        lines.append(f"| {name} | {elapsed:.2f} | {ops:,.0f} | {elapsed / iterations * 1000:.3f} |")
    baseline = results[0][1]
    compiled = results[1][1]
    if baseline:
        lines += ["", f"Builder overhead vs hand-written: {(compiled / baseline - 1) * 100:.1f}%"]
    return "\n".join(lines)


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Benchmark confquery query compilation")
    parser.add_argument("--iterations", type=int, default=10_000, help="Iterations per case")
    parser.add_argument("--warmup", type=int, default=1_000, help="Warm-up iterations per case")
    parser.add_argument("--output", type=Path, default=None, help="Write the markdown report to this file")
    args = parser.parse_args(argv)

    report = format_report(run(args.iterations, args.warmup), args.iterations)
    print(report)
    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(report + "\n", encoding="utf-8")
        print(f"\nReport written to {args.output}")


if __name__ == "__main__":
    main()
