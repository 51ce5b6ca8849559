"""Global search engine and history instances to avoid circular imports."""

from .config import get_settings
from .core.engine import SearchEngine
from .core.history import JsonFileStore, SearchHistory

# Global search engine instance
settings = get_settings()
search_engine = SearchEngine(
    fuzzy_threshold=settings.fuzzy_threshold,
    browse_size=settings.browse_size,
    normalize_cache_size=settings.normalize_cache_size,
    proximity_window=settings.proximity_window,
    fuzzy_min_match_length=settings.fuzzy_min_match_length,
    max_suggestions=settings.max_suggestions,
)
search_history = SearchHistory(JsonFileStore(settings.history_path), settings.history_size)
