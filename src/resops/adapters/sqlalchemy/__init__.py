"""SQLAlchemy adapter – page source evaluating list queries in the database."""
from resops.adapters.sqlalchemy.page_source import SqlAlchemyPageSource

__all__ = ["SqlAlchemyPageSource"]
