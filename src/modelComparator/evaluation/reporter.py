"""
Experiment reporting utilities for modelComparator.

This module aggregates grid search rows into a comparison table and selects
the best configuration.
"""

from typing import Any, Dict, Iterable, List, Union
from pathlib import Path
import json
import math

import numpy as np
import pandas as pd

from ..core.base import Direction, ReportRow
from ..core.exceptions import NoValidResultError
from ..utils.logger import get_logger

METRIC_COLUMNS = [
    'misclassification_rate',
    'sensitivity',
    'specificity',
    'train_misclassification_rate',
]


def select_best(
    rows: Iterable[ReportRow],
    metric: str = 'misclassification_rate',
    direction: Direction = Direction.MINIMIZE
) -> ReportRow:
    """
    Pick the row with the smallest (or largest) value of a metric.

    Failed rows and rows where the metric is NaN are skipped. Ties resolve to
    the row encountered first in enumeration order.

    Args:
        rows: Report rows in enumeration order
        metric: Metric name, e.g. "misclassification_rate"
        direction: MINIMIZE or MAXIMIZE

    Returns:
        The selected row

    Raises:
        NoValidResultError: If no row has a defined value for the metric
    """
    if isinstance(direction, str):
        direction = Direction(direction)

    best = None
    best_value = math.nan
    for row in rows:
        if row.failed:
            continue
        value = row.metric(metric)
        if math.isnan(value):
            continue
        if best is None:
            best, best_value = row, value
        elif direction is Direction.MINIMIZE and value < best_value:
            best, best_value = row, value
        elif direction is Direction.MAXIMIZE and value > best_value:
            best, best_value = row, value

    if best is None:
        raise NoValidResultError(f"No report row has a defined value for '{metric}'")
    return best


class ExperimentReport:
    """Append-only collection of report rows from one grid search."""

    def __init__(self, rows: Iterable[ReportRow] = ()):
        self.logger = get_logger("ExperimentReport")
        self._rows: List[ReportRow] = []
        self.extend(rows)

    def append(self, row: ReportRow) -> None:
        self._rows.append(row)

    def extend(self, rows: Iterable[ReportRow]) -> None:
        for row in rows:
            self.append(row)

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self):
        return iter(self.to_table())

    @property
    def failed_rows(self) -> List[ReportRow]:
        return [row for row in self.to_table() if row.failed]

    def to_table(self) -> List[ReportRow]:
        """Rows in the original grid enumeration order."""
        return sorted(self._rows, key=lambda row: row.index)

    def select_best(
        self,
        metric: str = 'misclassification_rate',
        direction: Direction = Direction.MINIMIZE
    ) -> ReportRow:
        best = select_best(self.to_table(), metric, direction)
        self.logger.info(
            f"Best configuration by {metric} ({Direction(direction).value}): "
            f"{best.hyperparams} -> {best.metric(metric):.4f}"
        )
        return best

    def to_dataframe(self) -> pd.DataFrame:
        """One row per grid point: hyperparameters, metrics and error."""
        records = []
        for row in self.to_table():
            record: Dict[str, Any] = {'index': row.index}
            record.update(row.hyperparams.as_dict())
            for column in METRIC_COLUMNS:
                record[column] = row.metric(column)
            record['fit_seconds'] = row.fit_seconds
            record['failed'] = row.failed
            record['error'] = row.error
            records.append(record)
        return pd.DataFrame.from_records(records)

    def summary(self) -> Dict[str, Any]:
        """Counts of succeeded and failed rows plus the best configuration."""
        table = self.to_table()
        summary: Dict[str, Any] = {
            'n_rows': len(table),
            'n_failed': sum(row.failed for row in table),
            'best': None,
        }
        summary['n_succeeded'] = summary['n_rows'] - summary['n_failed']
        try:
            best = select_best(table)
        except NoValidResultError:
            return summary
        summary['best'] = {
            'index': best.index,
            'hyperparams': best.hyperparams.as_dict(),
            'misclassification_rate': best.misclassification_rate,
        }
        return summary

    def save_csv(self, output_path: Union[str, Path]) -> None:
        """Save the comparison table as CSV."""
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        self.to_dataframe().to_csv(output_path, index=False)
        self.logger.info(f"Report table saved: {output_path}")

    def save_json(self, output_path: Union[str, Path]) -> None:
        """Save rows, including confusion matrices, as JSON."""
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        payload = {
            'summary': self.summary(),
            'rows': [self._row_to_dict(row) for row in self.to_table()],
        }
        with open(output_path, 'w', encoding='utf-8') as f:
            json.dump(self._make_json_serializable(payload), f, indent=2)

        self.logger.info(f"Report saved as JSON: {output_path}")

    @staticmethod
    def _row_to_dict(row: ReportRow) -> Dict[str, Any]:
        cm = row.confusion_matrix
        return {
            'index': row.index,
            'hyperparams': row.hyperparams.as_dict(),
            'misclassification_rate': row.misclassification_rate,
            'sensitivity': row.sensitivity,
            'specificity': row.specificity,
            'train_misclassification_rate': row.train_misclassification_rate,
            'confusion_matrix': None if cm is None else {
                'labels': list(cm.labels),
                'counts': cm.to_list(),
            },
            'fit_seconds': row.fit_seconds,
            'error': row.error,
        }

    def _make_json_serializable(self, obj: Any) -> Any:
        """Convert numpy values and NaN into JSON-friendly equivalents."""
        if isinstance(obj, np.ndarray):
            return [self._make_json_serializable(item) for item in obj.tolist()]
        elif isinstance(obj, dict):
            return {str(key): self._make_json_serializable(value) for key, value in obj.items()}
        elif isinstance(obj, (list, tuple)):
            return [self._make_json_serializable(item) for item in obj]
        elif isinstance(obj, np.integer):
            return int(obj)
        elif isinstance(obj, (float, np.floating)):
            return None if math.isnan(obj) else float(obj)
        else:
            return obj
