from .filters import CompiledFilter, FilterCompiler
from .sorting import DASHBOARD_DEFAULT_SORT, PUBLIC_DEFAULT_SORT, SORTABLE_COLUMNS, SortResolver
from .trending import PROFILES, TrendingPlan, TrendingProfile, TrendingScoreCalculator

__all__ = [
    "CompiledFilter",
    "FilterCompiler",
    "DASHBOARD_DEFAULT_SORT",
    "PUBLIC_DEFAULT_SORT",
    "SORTABLE_COLUMNS",
    "SortResolver",
    "PROFILES",
    "TrendingPlan",
    "TrendingProfile",
    "TrendingScoreCalculator",
]
