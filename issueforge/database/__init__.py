"""Database configuration, models, and the store handle."""

from issueforge.database.config import Base
from issueforge.database.store import IssueStore, get_store
from issueforge.database import models

__all__ = ["Base", "IssueStore", "get_store", "models"]
