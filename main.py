"""CLI entrypoint for the strands puzzle grid generator."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List

from strands.core.constants import PackingMode, SpangramStrategy
from strands.core.models import GenerateInput
from strands.engine.generator import GeneratorConfig, StrandsGenerator
from strands.utils.logger import configure_logging
from strands.utils.pretty import print_result_stats


def parse_words_file(path: Path) -> List[str]:
    """Read words from a file, one entry per line. Blank lines and # comments are skipped."""
    entries: List[str] = []
    for line in path.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        entries.append(line)
    return entries


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate fully covered 8x6 Strands letter grids",
    )
    parser.add_argument(
        "--words",
        nargs="+",
        metavar="WORD",
        help="Puzzle words; the first one is the spangram",
    )
    parser.add_argument(
        "--words-file",
        type=Path,
        metavar="FILE",
        help="File with one word per line, spangram first (# comments and blank lines ignored)",
    )
    parser.add_argument("--title", type=str, default="", help="Puzzle title")
    parser.add_argument("--theme", type=str, default="", help="Puzzle theme / hint")
    parser.add_argument("--author", type=str, default="", help="Puzzle author")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducibility")
    parser.add_argument(
        "--strategy",
        type=str,
        choices=[s.value for s in SpangramStrategy],
        default=None,
        help="Spangram shape strategy (random per attempt when omitted)",
    )
    parser.add_argument(
        "--mode",
        type=str,
        choices=[m.value for m in PackingMode],
        default=PackingMode.HEURISTIC.value,
        help="How the remaining words are packed",
    )
    parser.add_argument(
        "--max-attempts",
        type=int,
        default=100,
        help="Fresh generation attempts before falling back (default 100)",
    )
    parser.add_argument(
        "--lenient-spangram",
        action="store_true",
        help="Only warn (instead of failing) when the spangram is shorter than 6 letters",
    )
    parser.add_argument(
        "--no-fallback",
        action="store_true",
        help="Disable the straight-line and CP-SAT fallback packers",
    )
    parser.add_argument("--output", type=Path, help="Optional path to JSON output")
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    parser.add_argument(
        "--pretty",
        action="store_true",
        help="Print the grid and stats to stderr as well",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    if not args.words and not args.words_file:
        parser.error("provide --words or --words-file")
    if args.max_attempts < 1:
        parser.error("--max-attempts must be at least 1")

    words: List[str] = []
    if args.words:
        words.extend(args.words)
    if args.words_file:
        words.extend(parse_words_file(args.words_file))

    config = GeneratorConfig(
        seed=args.seed,
        max_attempts=args.max_attempts,
        spangram_strategy=SpangramStrategy(args.strategy) if args.strategy else None,
        packing_mode=PackingMode(args.mode),
        strict_spangram=not args.lenient_spangram,
        use_straight_fallback=not args.no_fallback,
        use_exact_fallback=not args.no_fallback,
    )
    data = GenerateInput(words=words, title=args.title, theme=args.theme, author=args.author)
    result = StrandsGenerator(config).generate(data)

    payload: Dict[str, Any] = {
        "title": args.title,
        "theme": args.theme,
        "author": args.author,
        **result.to_jsonable(),
    }

    output_text = json.dumps(payload, ensure_ascii=False, indent=2)
    if args.output:
        args.output.write_text(output_text, encoding="utf-8")
    else:
        print(output_text)
    if args.pretty:
        print_result_stats(result, stream=sys.stderr)
    return 0 if result.ok else 1


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
