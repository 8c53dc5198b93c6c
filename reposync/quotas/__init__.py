# RepoSync Quotas Module
# Resource quota enforcement shared across sync passes

from reposync.quotas.tracker import InMemoryQuotaTracker, QuotaTracker

__all__ = [
    "QuotaTracker",
    "InMemoryQuotaTracker",
]
