"""Core services: validation, song store, CRUD and statistics."""
from songdeck.core.song_service import ServiceResponse, SongService
from songdeck.core.song_store import SongStore
from songdeck.core.statistics import StatisticsService, compute_statistics

__all__ = ["ServiceResponse", "SongService", "SongStore", "StatisticsService", "compute_statistics"]
