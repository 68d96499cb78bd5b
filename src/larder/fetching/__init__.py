"""Page retrieval collaborators feeding the extraction pipeline."""

from .fetcher import FetchError, PageFetcher, fetch_page

__all__ = ["FetchError", "PageFetcher", "fetch_page"]
