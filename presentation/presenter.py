# presentation/presenter.py
"""Formats model comparison and abundance results for output destinations."""

import csv
import io
import json
import math
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import pandas as pd

from config.settings import settings
from utils.logger import get_logger

logger = get_logger(__name__)

FORMATS = ("json", "human", "csv", "markdown")
METRIC_COLUMNS = ["n_obs", "r_squared", "aic", "bic", "cv_rmse"]


class Presenter:
    """
    Formats pipeline results for different output formats and destinations.
    Supports JSON, human-readable text, CSV, and Markdown.
    """

    def __init__(self, output_format: Optional[str] = None, output_file: Optional[str] = None):
        """
        Args:
            output_format: One of 'json', 'human', 'csv', 'markdown'.
            output_file: Optional file path to write output. If None, output is returned as string.
        """
        self.output_format = (output_format or settings.output_format).lower()
        if self.output_format not in FORMATS:
            raise ValueError(f"Unsupported output format: {self.output_format}")
        self.output_file = Path(output_file) if output_file else None

    def format_comparison(self, result: Dict[str, Any]) -> Union[str, None]:
        """
        Format a model comparison result.

        Args:
            result: Dictionary with keys 'dataset', 'cross_validation',
                    'models' (name -> metrics) and 'best'.

        Returns:
            Formatted string if output_file is None, otherwise writes to file and returns None.
        """
        if self.output_format == "json":
            output = json.dumps(result, indent=2, default=str)
        elif self.output_format == "human":
            output = self._comparison_human(result)
        elif self.output_format == "csv":
            output = self._comparison_csv(result)
        else:
            output = self._comparison_markdown(result)
        return self._emit(output)

    def format_abundance(
        self,
        table: pd.DataFrame,
        sites: Optional[pd.DataFrame] = None,
        title: str = "Abundance by year",
    ) -> Union[str, None]:
        """Format a yearly abundance table and optional top-sites table."""
        if self.output_format == "json":
            data = {"abundance": self._records(table)}
            if sites is not None:
                data["top_sites"] = self._records(sites)
            output = json.dumps(data, indent=2, default=str)
        elif self.output_format == "human":
            parts = [title, "=" * len(title), table.to_string(index=False)]
            if sites is not None:
                parts += ["", "Top sites", "=========", sites.to_string(index=False)]
            output = "\n".join(parts)
        elif self.output_format == "csv":
            # Top sites are a different shape; CSV carries only the main table
            output = table.to_csv(index=False)
        else:
            parts = [f"# {title}", "", self._markdown_table(table)]
            if sites is not None:
                parts += ["", "## Top sites", "", self._markdown_table(sites)]
            output = "\n".join(parts)
        return self._emit(output)

    # ----- comparison formats -----

    def _comparison_human(self, data: Dict[str, Any]) -> str:
        lines = []
        dataset = data.get("dataset", {})
        cv = data.get("cross_validation", {})
        lines.append(f"Data: {dataset.get('path', '<in memory>')} ({dataset.get('n_rows')} complete rows)")
        lines.append(f"Cross-validation: {cv.get('n_folds')} folds, seed {cv.get('seed')}")
        lines.append("")

        header = f"{'Model':<16} {'R^2':>7} {'AIC':>11} {'BIC':>11} {'CV RMSE':>10}"
        lines.append(header)
        lines.append("-" * len(header))
        for name, metrics in data["models"].items():
            lines.append(
                f"{name:<16} {self._num(metrics.get('r_squared'), 4):>7} "
                f"{self._num(metrics.get('aic'), 2):>11} {self._num(metrics.get('bic'), 2):>11} "
                f"{self._num(metrics.get('cv_rmse'), 4):>10}"
            )
        lines.append("")
        for name, metrics in data["models"].items():
            lines.append(f"  {name}: {metrics.get('formula')}")
        if data.get("best"):
            lines.append("")
            lines.append(f"Lowest cross-validated RMSE: {data['best']}")
        return "\n".join(lines)

    def _comparison_csv(self, data: Dict[str, Any]) -> str:
        output = io.StringIO()
        writer = csv.writer(output, lineterminator="\n")
        writer.writerow(["model", "formula", *METRIC_COLUMNS])
        for name, metrics in data["models"].items():
            writer.writerow([name, metrics.get("formula"), *[metrics.get(c) for c in METRIC_COLUMNS]])
        return output.getvalue()

    def _comparison_markdown(self, data: Dict[str, Any]) -> str:
        lines = ["# Model comparison", ""]
        cv = data.get("cross_validation", {})
        dataset = data.get("dataset", {})
        lines.append(f"- **Rows**: {dataset.get('n_rows')}")
        lines.append(f"- **Folds**: {cv.get('n_folds')} (seed {cv.get('seed')})")
        lines.append("")
        lines.append("| Model | Formula | R² | AIC | BIC | CV RMSE |")
        lines.append("|-------|---------|----|-----|-----|---------|")
        for name, metrics in data["models"].items():
            lines.append(
                f"| {name} | `{metrics.get('formula')}` | {self._num(metrics.get('r_squared'), 4)} "
                f"| {self._num(metrics.get('aic'), 2)} | {self._num(metrics.get('bic'), 2)} "
                f"| {self._num(metrics.get('cv_rmse'), 4)} |"
            )
        if data.get("best"):
            lines.append("")
            lines.append(f"**Lowest cross-validated RMSE:** {data['best']}")
        return "\n".join(lines)

    # ----- helpers -----

    @staticmethod
    def _num(value: Optional[float], digits: int) -> str:
        if value is None:
            return "n/a"
        if isinstance(value, float) and math.isinf(value):
            return "-inf" if value < 0 else "inf"
        return f"{value:.{digits}f}"

    @staticmethod
    def _records(table: pd.DataFrame) -> List[Dict[str, Any]]:
        # Cast numpy scalars to builtins so json can serialise them
        return json.loads(table.to_json(orient="records"))

    @staticmethod
    def _markdown_table(table: pd.DataFrame) -> str:
        columns = [str(c) for c in table.columns]
        lines = ["| " + " | ".join(columns) + " |", "|" + "|".join("---" for _ in columns) + "|"]
        for row in table.itertuples(index=False):
            lines.append("| " + " | ".join(str(v) for v in row) + " |")
        return "\n".join(lines)

    def _emit(self, output: str) -> Union[str, None]:
        if self.output_file:
            self._write_to_file(output)
            return None
        return output

    def _write_to_file(self, content: str) -> None:
        """Write content to output file, creating directories if needed."""
        self.output_file.parent.mkdir(parents=True, exist_ok=True)
        with open(self.output_file, "w", encoding="utf-8") as f:
            f.write(content)
        logger.info(f"Output written to {self.output_file}")
