"""Access to the Harvest REST API.

`HarvestApi` performs the raw calls; `HarvestReports` composes them into
filtered views such as active clients, admins or running timers.

Usage:
    api = HarvestApi("myaccount", "user@example.com", "secret")
    reports = HarvestReports(api, ReportSettings(time_zone="Europe/Paris"))

    result = reports.get_active_clients()
    if result.is_success():
        clients = result.payload
"""

__all__ = ["HarvestAccessor", "HarvestApi", "HarvestReports"]

from harvest_reports.api.base import HarvestAccessor  # noqa: F401
from harvest_reports.api.client import HarvestApi  # noqa: F401
from harvest_reports.api.reports import HarvestReports  # noqa: F401
