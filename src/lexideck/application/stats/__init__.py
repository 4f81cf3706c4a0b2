# Application Stats Package
from .summary import ProgressSummary, summarize

__all__ = ["ProgressSummary", "summarize"]
