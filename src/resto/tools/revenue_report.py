from __future__ import annotations

import argparse
import json
import sys
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Sequence

from resto.application.use_cases.revenue_report import summarize_revenue
from resto.domain.order.revenue import CompletedOrderRecord
from resto.infrastructure.observability.logging_config import configure_logging
from resto.infrastructure.observability.otel import configure_otel


def _is_completed(payload: Mapping[str, Any]) -> bool:
    status = payload.get("status")
    if status is None:
        # History exports omit the status and carry a completion time instead.
        return bool(payload.get("completedAt"))
    return str(status).upper() == "COMPLETED"


def load_completed_records(path: Path) -> list[CompletedOrderRecord]:
    document = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(document, Mapping):
        document = document.get("orders", [])
    if not isinstance(document, list):
        raise ValueError(f"{path} must contain a list of orders")
    return [
        CompletedOrderRecord.from_mapping(entry)
        for entry in document
        if isinstance(entry, Mapping) and _is_completed(entry)
    ]


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Aggregate revenue over an exported list of orders, repairing magnitude anomalies."
    )
    parser.add_argument("path", type=Path, help="JSON file with a list of order records.")
    parser.add_argument("--currency", default=None, help="Currency code for the report.")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    configure_logging()
    configure_otel()

    try:
        records = load_completed_records(args.path)
    except (OSError, ValueError) as exc:
        print(f"cannot read orders: {exc}", file=sys.stderr)
        return 2

    report = summarize_revenue(records, currency=args.currency)
    print(report.model_dump_json(indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
