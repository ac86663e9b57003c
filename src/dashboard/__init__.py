"""Dashboard filtering and aggregation.

Pure functions over a projected roster:
- Filters: multi-select department/location/level/status filters
- Stats: KPI counts and rates
- Charts: status distribution, demographic breakdowns, response timeline
- Tables: search and sort helpers
"""

from src.dashboard.filters import (
    PENDING_SEARCH_FIELDS,
    RESPONSE_SEARCH_FIELDS,
    apply_filters,
    default_filters,
    filter_options,
    search_contacts,
    sort_contacts,
)
from src.dashboard.schemas import (
    DashboardFilters,
    DashboardStats,
    DemographicRow,
    StatusCount,
    TimelinePoint,
)
from src.dashboard.stats import (
    compute_stats,
    demographic_breakdown,
    response_timeline,
    status_distribution,
)

__all__ = [
    # Filters
    "DashboardFilters",
    "PENDING_SEARCH_FIELDS",
    "RESPONSE_SEARCH_FIELDS",
    "apply_filters",
    "default_filters",
    "filter_options",
    "search_contacts",
    "sort_contacts",
    # Stats
    "DashboardStats",
    "DemographicRow",
    "StatusCount",
    "TimelinePoint",
    "compute_stats",
    "demographic_breakdown",
    "response_timeline",
    "status_distribution",
]
