from __future__ import annotations
import argparse
import logging
import sys
from typing import Any, Dict, List, Optional
from licensematch.io.json_io import load_template_events, load_text, save_json
from licensematch.io import load_config, build_from_config
from licensematch.core.compare import compare_template
from licensematch.reporting import format_text_report, build_json_report
from licensematch import __version__

logger = logging.getLogger(__name__)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="licensematch", description="Compare license text to a license template")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log matcher decisions to stderr")
    sub = parser.add_subparsers(dest="cmd", required=True)

    p_cmp = sub.add_parser("compare", help="Check a license text against a template event file")
    p_cmp.add_argument("--template", required=True, help="Path to template events JSON")
    p_cmp.add_argument("--text", required=True, help="Path to the license text to check")
    p_cmp.add_argument("--config", required=False, help="Path to configuration file (JSON/YAML)")
    p_cmp.add_argument("--out", required=False, help="Path to write the JSON report")
    sub.add_parser("version", help="Show licensematch version and exit")

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s: %(name)s: %(message)s",
    )

    if args.cmd == "version":
        print(__version__)
        return 0

    events = load_template_events(args.template)
    text = load_text(args.text)
    tokenizer, pattern_matcher = None, None
    if args.config:
        tokenizer, pattern_matcher = build_from_config(load_config(args.config))
    logger.info("Comparing %s against %d template events", args.text, len(events))

    comparison = compare_template(events, text, tokenizer=tokenizer, pattern_matcher=pattern_matcher)
    description = comparison.get_differences()

    if args.out:
        report: Dict[str, Any] = build_json_report(description, text)
        save_json(args.out, report)
    else:
        print(format_text_report(description, text, title=f"License Template Comparison: {args.text}"))
    return 0 if description.matched else 1


if __name__ == "__main__":
    sys.exit(main())
