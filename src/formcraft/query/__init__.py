"""List-view helpers: search/filter/sort and pagination."""

from .pagination import Pagination
from .search import SearchResult, search_filter

__all__ = ["Pagination", "SearchResult", "search_filter"]
