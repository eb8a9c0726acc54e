from __future__ import annotations

import argparse
import dataclasses
import json
import logging
from typing import Any, List, Optional

from dotenv import load_dotenv

from .config import DEFAULT_SERIES_COUNT, client_config_from_env
from .errors import GridRequestError
from .grid_client import build_series_client
from .models import Game, QueryInput
from .pipeline import ScoutingPipeline
from .render import render_availability_text, render_text
from .status import initial_status

logger = logging.getLogger(__name__)


def _write_text(path: str, text: str) -> None:
    with open(path, "w", encoding="utf-8") as f:
        f.write(text)


def _to_json(obj: Any) -> str:
    return json.dumps(dataclasses.asdict(obj), indent=2)


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Automated scouting report generator (GRID)")
    parser.add_argument("--game", choices=[g.value for g in Game], default=Game.VAL.value, help="Game title")
    parser.add_argument("--opponent", default="", help="Opponent team name")
    parser.add_argument("--region", default="", help="Region focus (e.g. EMEA)")
    parser.add_argument("--series", type=int, default=DEFAULT_SERIES_COUNT, help="Recent series to pull (1-50)")
    parser.add_argument("--availability", action="store_true", help="List available series instead of a report")
    parser.add_argument(
        "--output-format", choices=["json", "text"], default="text", help="Output format"
    )
    parser.add_argument("--output", default=None, help="Path to output report JSON/text")
    parser.add_argument("--pdf", default=None, help="Also render the report to this PDF path")
    parser.add_argument("--mock", action="store_true", help="Use the built-in sample data")
    parser.add_argument("--debug", action="store_true", help="Print debug logs")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    load_dotenv()
    args = _parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.debug else logging.INFO)

    config = client_config_from_env()
    if args.mock:
        config = dataclasses.replace(config, force_mock=True)
    status = initial_status(config)
    pipeline = ScoutingPipeline(client=build_series_client(config, status=status))
    query = QueryInput.build(args.game, args.opponent, args.region, args.series)

    try:
        if args.availability:
            summary = pipeline.preview(query)
            output_text = _to_json(summary) if args.output_format == "json" else render_availability_text(summary)
        else:
            if not query.opponent:
                raise SystemExit("--opponent is required to generate a report.")
            bundle = pipeline.generate(query)
            if args.output_format == "json":
                output_text = json.dumps(
                    {
                        "report": dataclasses.asdict(bundle.report),
                        "charts": dataclasses.asdict(bundle.charts),
                    },
                    indent=2,
                )
            else:
                output_text = render_text(bundle, pipeline.history.snapshots())
            if args.pdf:
                from .report_pdf import build_pdf

                build_pdf(bundle, args.pdf)
                logger.info(f"Wrote PDF report to {args.pdf}")
    except GridRequestError as exc:
        raise SystemExit(f"Unable to load GRID data ({status.message}): {exc}")

    if args.output:
        _write_text(args.output, output_text)
    else:
        print(output_text)


if __name__ == "__main__":
    main()
