"""HTTP adapter – async httpx client, list page fetcher and saved-filter store."""
from resops.adapters.http.client import HttpClient, HttpxHttpClient
from resops.adapters.http.pages import HttpPageFetcher
from resops.adapters.http.saved_filters import HttpSavedFilterStore

__all__ = ["HttpClient", "HttpPageFetcher", "HttpSavedFilterStore", "HttpxHttpClient"]
