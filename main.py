#!/usr/bin/env python3
"""
CLI entry point for the model comparison pipeline.
"""

import argparse
import logging
import sys
from pathlib import Path

# Add project root to path if running as script
sys.path.insert(0, str(Path(__file__).parent))

from config.settings import settings
from utils.exceptions import PipelineError
from utils.helpers import parse_assignments
from utils.logger import get_logger, set_level

logger = get_logger(__name__)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Compare linear models by AIC, BIC and k-fold cross-validation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py --data bottle.csv --model "full=o2sat ~ t_degc + salnty + po4um + depthm" \\
                 --model "reduced=o2sat ~ t_degc + salnty + po4um" --folds 10 --seed 1
  python main.py --data frogs.csv --abundance amphibian_number --date-field survey_date \\
                 --group-by amphibian_life_stage --filter amphibian_species=RAMU --site-field lake_id
        """,
    )

    parser.add_argument("--data", required=True, help="CSV file with one observation per row")
    parser.add_argument(
        "--rename",
        action="append",
        default=[],
        metavar="OLD=NEW",
        help="Rename a column before use (repeatable)",
    )
    parser.add_argument(
        "--normalize-headers",
        action="store_true",
        help="Convert column headers to snake_case before renaming",
    )

    # Model comparison mode
    parser.add_argument(
        "--model",
        action="append",
        default=[],
        metavar="NAME=FORMULA",
        help="Model to compare, e.g. 'm1=o2sat ~ temp + salinity' (repeatable)",
    )
    parser.add_argument("--folds", type=int, default=settings.n_folds, help="Number of folds k")
    parser.add_argument("--seed", type=int, default=settings.random_seed, help="Fold shuffle seed")
    parser.add_argument("--jobs", type=int, default=settings.n_jobs, help="Worker threads for folds")
    parser.add_argument(
        "--strict",
        action="store_true",
        default=settings.strict_validation,
        help="Fail on missing values instead of dropping rows",
    )

    # Abundance mode
    parser.add_argument("--abundance", metavar="COUNT_FIELD", help="Summarise counts per year")
    parser.add_argument("--year-field", default="year", help="Year column (default: year)")
    parser.add_argument("--date-field", help="Date column to derive the year from")
    parser.add_argument("--group-by", action="append", default=[], help="Extra grouping column")
    parser.add_argument("--site-field", help="Also rank sites by total count")
    parser.add_argument("--top", type=int, default=5, help="Number of top sites (default: 5)")
    parser.add_argument(
        "--filter",
        action="append",
        default=[],
        metavar="FIELD=VALUE",
        help="Keep only rows where FIELD equals VALUE (repeatable)",
    )

    # Output options
    parser.add_argument(
        "--format",
        choices=["json", "human", "csv", "markdown"],
        default=settings.output_format,
        help="Output format (default: %(default)s)",
    )
    parser.add_argument("--output", help="Output file path (optional)")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")

    return parser.parse_args(argv)


def build_specifications(model_args):
    """Turn NAME=FORMULA arguments into ModelSpecification objects."""
    from models.specification import ModelSpecification

    specs = []
    for arg in model_args:
        # One pair at a time so a repeated name reaches the duplicate check
        (name, formula), = parse_assignments([arg], "--model").items()
        specs.append(ModelSpecification.from_formula(name, formula))
    return specs


def main(argv=None):
    args = parse_args(argv)

    if args.verbose:
        set_level(logging.DEBUG)
        logger.debug("Debug logging enabled")

    from data.data_loader import DataLoader
    from data.data_validator import DataValidator
    from evaluation.cross_validation import CrossValidator
    from pipeline.orchestrator import ComparisonPipeline
    from presentation.presenter import Presenter

    try:
        rename = parse_assignments(args.rename, "--rename")
        loader = DataLoader(
            validator=DataValidator(strict_mode=args.strict),
            normalize_headers=args.normalize_headers,
        )
        presenter = Presenter(output_format=args.format, output_file=args.output)
        pipeline = ComparisonPipeline(
            data_loader=loader,
            cross_validator=CrossValidator(n_folds=args.folds, seed=args.seed, n_jobs=args.jobs),
            presenter=presenter,
        )

        if args.abundance:
            result = pipeline.summarise_abundance(
                args.data,
                count_field=args.abundance,
                year_field=args.year_field,
                date_field=args.date_field,
                group_fields=args.group_by,
                site_field=args.site_field,
                filters={k: [v] for k, v in parse_assignments(args.filter, "--filter").items()},
                n_sites=args.top,
                rename=rename or None,
            )
        else:
            if not args.model:
                logger.error("At least one --model NAME=FORMULA is required (or use --abundance)")
                return 1
            specs = build_specifications(args.model)
            result = pipeline.run(args.data, specs, rename=rename or None)
    except (PipelineError, ValueError) as e:
        logger.error(str(e))
        return 1

    if result["formatted_output"]:
        print(result["formatted_output"])
    return 0


if __name__ == "__main__":
    sys.exit(main())
