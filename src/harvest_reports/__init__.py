"""Harvest Reports - aggregated views over the Harvest time tracking API."""

__version__ = "0.1.0"

from harvest_reports.api.client import HarvestApi  # noqa: E402
from harvest_reports.api.reports import HarvestReports  # noqa: E402
from harvest_reports.core.result import Result  # noqa: E402

__all__ = ["HarvestApi", "HarvestReports", "Result", "__version__"]
