"""Smart (context-aware) rendering."""

from whenny.configuration.settings import RenderStrategy, SmartBucketRule, SmartPredicate

from .selector import SmartSelection, select_strategy, smart

__all__ = [
    "RenderStrategy",
    "SmartBucketRule",
    "SmartPredicate",
    "SmartSelection",
    "select_strategy",
    "smart",
]
