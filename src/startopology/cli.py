"""CLI entry point: load a star table, compute the pairwise matrices, write the report.

    uv run startopology stars.txt --output-dir out --plot
"""

import argparse
import logging
import sys
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

from startopology.catalog import FormatError
from startopology.compute import DegenerateRowError, run
from startopology.config import LOG_LEVELS, Settings, load_settings
from startopology.i18n import LANGUAGES, t
from startopology.report import print_summary, write_matrices

logger = logging.getLogger(__name__)


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="startopology",
        description="Pairwise distance, topological probability and entropy matrices for a star table.",
    )
    parser.add_argument(
        "input",
        nargs="?",
        type=Path,
        default=settings.input_path,
        help=f"Catalog file (default: {settings.input_path})",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=settings.output_dir,
        help="Directory for R.txt, P.txt and H.txt",
    )
    parser.add_argument("--lang", choices=LANGUAGES, default=settings.lang)
    parser.add_argument(
        "--strict",
        action=argparse.BooleanOptionalAction,
        default=settings.strict,
        help="Abort when a star's distance row sums to zero",
    )
    parser.add_argument(
        "--conventional-dec",
        dest="conventional_declination",
        action=argparse.BooleanOptionalAction,
        default=settings.conventional_declination,
        help="Use 60/3600 arc-minute/arc-second divisors for declination",
    )
    parser.add_argument(
        "--plot", action="store_true", help="Also save a heatmap PNG of the matrices"
    )
    parser.add_argument(
        "--log-level", type=str.upper, choices=LOG_LEVELS, default=settings.log_level
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    load_dotenv(find_dotenv(usecwd=True))
    try:
        settings = load_settings()
    except ValueError as e:
        print(e, file=sys.stderr)
        return 2

    args = build_parser(settings).parse_args(argv)
    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.debug("Running with %s", args)

    try:
        catalog = run(
            args.input,
            conventional_declination=args.conventional_declination,
            strict=args.strict,
        )
        write_matrices(catalog, args.output_dir)
    except FormatError as e:
        print(t("error_format", args.lang).format(error=e), file=sys.stderr)
        return 1
    except DegenerateRowError as e:
        print(t("error_degenerate", args.lang).format(error=e), file=sys.stderr)
        return 1
    except OSError as e:
        print(t("error_io", args.lang).format(error=e), file=sys.stderr)
        return 1

    print_summary(catalog, args.lang)

    if args.plot:
        from startopology.renderers.static import save_heatmaps

        path = save_heatmaps(catalog, args.output_dir / "matrices.png")
        print(t("saved", args.lang).format(path=path))

    return 0


if __name__ == "__main__":
    sys.exit(main())
