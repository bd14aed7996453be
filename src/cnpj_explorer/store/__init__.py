"""Local persistence for cross-session state."""

from cnpj_explorer.store.favorites import FAVORITES_KEY, FavoritesStore, select_favorites

__all__ = ["FAVORITES_KEY", "FavoritesStore", "select_favorites"]
