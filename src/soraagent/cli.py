from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from .orchestrator import AgentOrchestrator
from .request import ValidationError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Turn a narrative script into scene beats, asset briefs and a Sora² shot timeline."
    )
    parser.add_argument("script", type=Path, help="Path to the script text file, or - to read stdin")
    parser.add_argument("--tone", help="Director tone, e.g. 'Neo-noir thriller'")
    parser.add_argument("--duration", help="Target running time, e.g. '3-5 minutes'")
    parser.add_argument("--ratio", help="Aspect ratio forwarded to the renderer, e.g. '16:9'")
    parser.add_argument("--voice", help="Narration voice, e.g. 'Calm male documentary'")
    parser.add_argument(
        "--config",
        type=Path,
        help="Optional path to pipeline configuration JSON/YAML",
    )
    parser.add_argument(
        "--plan-only",
        action="store_true",
        help="Build the plan without contacting the Sora² render API",
    )
    parser.add_argument(
        "--output",
        type=Path,
        help="Write the response JSON here instead of stdout",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    orchestrator = (
        AgentOrchestrator.from_file(args.config)
        if args.config
        else AgentOrchestrator.default()
    )

    if str(args.script) == "-":
        script = sys.stdin.read()
    else:
        script = args.script.read_text(encoding="utf-8")

    payload = {
        "script": script,
        "tone": args.tone,
        "duration": args.duration,
        "ratio": args.ratio,
        "voice": args.voice,
    }
    try:
        request = orchestrator.parse_request(payload)
    except ValidationError as exc:
        print(str(exc), file=sys.stderr)
        return 2

    response = orchestrator.run(request, dispatch=not args.plan_only)
    text = json.dumps(response.to_wire(), indent=2, ensure_ascii=False)
    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(text + "\n", encoding="utf-8")
        print(f"Wrote plan to {args.output}", file=sys.stderr)
    else:
        print(text)
    return 0


if __name__ == "__main__":
    sys.exit(main())
