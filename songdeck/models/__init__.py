"""Data models for songs and statistics."""
from songdeck.models.song import Song, Statistics

__all__ = [
    "Song",
    "Statistics",
]
