"""Main pipeline orchestrator that ties together all components."""

import time
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Sequence, Union

from data.abundance import abundance_by_year, add_year, top_sites
from data.data_loader import DataLoader
from evaluation.cross_validation import CrossValidator
from models.linear import fit_ols
from models.specification import ModelSpecification
from presentation.presenter import Presenter
from utils.exceptions import PipelineError
from utils.helpers import unique_in_order
from utils.logger import get_logger

logger = get_logger(__name__)


class ComparisonPipeline:
    """
    End-to-end model comparison for a single observation table.
    Coordinates loading, cleaning, full-data fits (AIC/BIC),
    cross-validation and presentation.
    """

    def __init__(
        self,
        data_loader: Optional[DataLoader] = None,
        cross_validator: Optional[CrossValidator] = None,
        presenter: Optional[Presenter] = None,
    ):
        """
        Initialize pipeline components. If not provided, default instances are created.

        Args:
            data_loader: Reads and validates the observation table.
            cross_validator: Scores specifications by k-fold RMSE.
            presenter: Formats output for end users.
        """
        self.data_loader = data_loader or DataLoader()
        self.cross_validator = cross_validator or CrossValidator()
        self.presenter = presenter or Presenter()

    def run(
        self,
        path: Union[str, Path],
        specifications: Iterable[ModelSpecification],
        rename: Optional[Dict[str, str]] = None,
    ) -> Dict[str, Any]:
        """
        Compare model specifications on the table at ``path``.

        Every specification is fitted to the same complete-case rows: a row
        missing any field used by any model is dropped for all of them.

        Returns:
            Dictionary containing:
                - dataset: path, n_rows, fields
                - cross_validation: n_folds, seed
                - models: name -> formula, n_obs, r_squared, aic, bic, cv_rmse
                - best: name with the lowest mean cross-validated RMSE
                - formatted_output: string (None if written to a file)
        """
        specifications = list(specifications)
        if not specifications:
            raise PipelineError("At least one model specification is required")

        start_time = time.time()
        fields = unique_in_order(f for spec in specifications for f in spec.fields)
        logger.info(f"Starting comparison of {len(specifications)} model(s) on {path}")

        try:
            # ---- Step 1: Load and clean ----
            logger.info("Step 1/3: Loading data...")
            dataset = self.data_loader.load_dataset(path, fields, rename=rename)

            # ---- Step 2: Full-data fits ----
            logger.info("Step 2/3: Fitting models on all rows...")
            models = {}
            for spec in specifications:
                fit = fit_ols(dataset, spec)
                models[spec.name] = {
                    "formula": spec.formula,
                    "n_obs": fit.n_obs,
                    "r_squared": fit.r_squared,
                    "aic": fit.aic(),
                    "bic": fit.bic(),
                    "coefficients": {"(intercept)": fit.intercept, **fit.coefficients},
                }

            # ---- Step 3: Cross-validation ----
            logger.info("Step 3/3: Cross-validating...")
            cv_scores = self.cross_validator.evaluate(dataset, specifications)
            for name, score in cv_scores.items():
                models[name]["cv_rmse"] = score

        except PipelineError as e:
            logger.error(f"Comparison failed: {e}")
            raise
        except Exception as e:
            logger.error(f"Comparison failed: {e}", exc_info=True)
            raise PipelineError(f"Comparison failed: {e}") from e

        result = {
            "dataset": {"path": str(path), "n_rows": len(dataset), "fields": list(dataset.fields)},
            "cross_validation": {
                "n_folds": self.cross_validator.n_folds,
                "seed": self.cross_validator.seed,
            },
            "models": models,
            "best": min(cv_scores, key=cv_scores.get),
        }
        result["formatted_output"] = self.presenter.format_comparison(result)

        elapsed = time.time() - start_time
        logger.info(f"Comparison completed in {elapsed:.2f} seconds")
        return result

    def summarise_abundance(
        self,
        path: Union[str, Path],
        count_field: str,
        year_field: str = "year",
        date_field: Optional[str] = None,
        group_fields: Sequence[str] = (),
        site_field: Optional[str] = None,
        filters: Optional[Dict[str, Sequence]] = None,
        n_sites: int = 5,
        rename: Optional[Dict[str, str]] = None,
    ) -> Dict[str, Any]:
        """
        Yearly abundance table (and optionally the top sites) for a survey file.

        Args:
            path: CSV of survey records.
            count_field: Column holding individual counts.
            year_field: Column holding the survey year (created from date_field if given).
            date_field: Optional date column to derive the year from.
            group_fields: Extra grouping columns (e.g. life stage).
            site_field: If given, also rank sites by total count.
            filters: Mapping of column -> allowed value(s).
            n_sites: Number of top sites to report.
            rename: Optional mapping of source column name to field name.
        """
        strict = self.data_loader.validator.strict_mode
        try:
            frame = self.data_loader.load_frame(path, rename=rename)
            if date_field:
                frame = add_year(frame, date_field, year_field)
            table = abundance_by_year(
                frame, count_field, year_field, group_fields, filters, strict=strict
            )
            sites = None
            if site_field:
                sites = top_sites(
                    frame, site_field, count_field, n=n_sites, filters=filters, strict=strict
                )
        except PipelineError as e:
            logger.error(f"Abundance summary failed: {e}")
            raise
        except Exception as e:
            logger.error(f"Abundance summary failed: {e}", exc_info=True)
            raise PipelineError(f"Abundance summary failed: {e}") from e

        logger.info(f"Abundance summary: {len(table)} row(s) from {path}")
        return {
            "abundance": table,
            "top_sites": sites,
            "formatted_output": self.presenter.format_abundance(table, sites),
        }
