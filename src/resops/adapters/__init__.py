"""Adapters – httpx clients for the list/filter endpoints and a SQLAlchemy page source."""
