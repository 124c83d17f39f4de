from __future__ import annotations

import sys

from .cli.analyze_csv import main as analyze_main


def main(argv: list[str] | None = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)

    if not argv:
        return analyze_main([])

    cmd = argv[0].lower()
    rest = argv[1:]

    if cmd in {"analyze", "analysis", "figures"}:
        return analyze_main(rest)

    if cmd in {"tables", "summary"}:
        return analyze_main(["--no-plots", *rest])

    # Bare flags are treated as analyze
    if cmd.startswith("-"):
        return analyze_main(argv)

    print("Usage:")
    print("  python -m dropfour_analysis analyze [--csv ...] [--metric ...]")
    print("  python -m dropfour_analysis figures [--csv ...] [--outdir ...]")
    print("  python -m dropfour_analysis tables [--csv ...]")
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
