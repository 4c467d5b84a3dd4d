"""CLI entrypoint for scoring configured language selectors against a document."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from langselect.common.config_loader import SelectorBundle, load_selector_config, resolve_selector_names
from langselect.common.constants import COMMANDS, EXIT_HARD_FAIL, EXIT_NO_MATCH, EXIT_SUCCESS, SCORE_NONE
from langselect.common.errors import CandidateError, SelectorError
from langselect.common.fs import write_json
from langselect.common.logging import build_logger, generate_run_id, log_event
from langselect.common.models import Candidate, DocumentUri
from langselect.selector import score_candidate


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("command", choices=COMMANDS)
    parser.add_argument("--uri", default=None)
    parser.add_argument("--path", default=None)
    parser.add_argument("--language", default=None)
    parser.add_argument("--unsynchronized", action="store_true")
    parser.add_argument("--only", nargs="+", default=None)
    parser.add_argument("--config-dir", default="./config")
    parser.add_argument("--overlay-config-dir", default=None)
    parser.add_argument("--allow-unknown", action="store_true")
    parser.add_argument("--output", default=None)
    parser.add_argument("--run-id", default=None)
    parser.add_argument("--log-dir", default=None)
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARN", "ERROR"])
    return parser.parse_args(argv)


def build_candidate(args: argparse.Namespace) -> Candidate:
    if args.uri and args.path:
        raise CandidateError("Pass either --uri or --path, not both")
    if args.uri:
        uri = DocumentUri.parse(args.uri)
    elif args.path:
        uri = DocumentUri.file(args.path)
    else:
        raise CandidateError("A candidate needs --uri or --path")
    if not args.language:
        raise CandidateError("A candidate needs --language")
    return Candidate(uri=uri, language_id=args.language, is_synchronized=not args.unsynchronized)


def score_all(bundle: SelectorBundle, candidate: Candidate, names: list[str]) -> list[dict]:
    results = [{"selector": name, "score": score_candidate(bundle.selectors[name], candidate)} for name in names]
    return sorted(results, key=lambda item: (-item["score"], item["selector"]))


def run_command(args: argparse.Namespace) -> int:
    run_id = args.run_id or generate_run_id()
    log_dir = Path(args.log_dir) if args.log_dir else None
    overlay_config_dir = Path(args.overlay_config_dir) if args.overlay_config_dir else None

    logger = build_logger(run_id, log_dir=log_dir, level=args.log_level)
    try:
        bundle = load_selector_config(
            Path(args.config_dir),
            allow_unknown=args.allow_unknown,
            overlay_config_dir=overlay_config_dir,
        )
        names = resolve_selector_names(bundle, args.only)
        log_event(logger, f"loaded {len(names)} selectors", run_id=run_id, event="CONFIG_LOADED", status="ok")
        if args.command == "check":
            return EXIT_SUCCESS

        candidate = build_candidate(args)
    except SelectorError as exc:
        log_event(logger, str(exc), run_id=run_id, event="SETUP_FAIL", status="error", error_code=exc.error_code)
        return EXIT_HARD_FAIL

    results = score_all(bundle, candidate, names)
    for item in results:
        logger.debug(
            "selector scored",
            extra={
                "run_id": run_id,
                "event": "SELECTOR_SCORED",
                "status": "ok",
                "selector": item["selector"],
                "scheme": candidate.uri.scheme,
                "language": candidate.language_id,
                "score": item["score"],
            },
        )

    payload = {"run_id": run_id, "candidate": candidate.to_dict(), "scores": results}
    if args.output:
        write_json(Path(args.output), payload)
    else:
        sys.stdout.write(json.dumps(payload, ensure_ascii=False, indent=2) + "\n")

    matched = [item for item in results if item["score"] > SCORE_NONE]
    log_event(
        logger,
        f"{len(matched)} of {len(results)} selectors matched",
        run_id=run_id,
        event="SCORE_END",
        status="ok",
        scheme=candidate.uri.scheme,
        language=candidate.language_id,
        score=results[0]["score"] if results else SCORE_NONE,
    )
    return EXIT_SUCCESS if matched else EXIT_NO_MATCH


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv or sys.argv[1:])
    try:
        return run_command(args)
    except Exception:
        return EXIT_HARD_FAIL


if __name__ == "__main__":
    raise SystemExit(main())
