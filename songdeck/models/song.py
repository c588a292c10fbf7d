"""Song record and derived statistics."""
from dataclasses import dataclass, field
from typing import Dict, Optional


@dataclass
class Song:
    """Stored catalog entry."""
    song_id: str
    title: str
    artist: str
    album: str
    genre: str
    created_at: str
    updated_at: str

    @property
    def display_name(self) -> str:
        return f"{self.title} by {self.artist}"

    def to_dict(self) -> dict:
        return {
            "id": self.song_id,
            "title": self.title,
            "artist": self.artist,
            "album": self.album,
            "genre": self.genre,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Song":
        """Build from the wire form (also accepts the on-disk form)."""
        return cls(
            song_id=data.get("id") or data["song_id"],
            title=data["title"],
            artist=data["artist"],
            album=data["album"],
            genre=data["genre"],
            created_at=data.get("createdAt") or data["created_at"],
            updated_at=data.get("updatedAt") or data["updated_at"],
        )


@dataclass
class Statistics:
    """Aggregate counts over all songs. Never persisted."""
    total_songs: int = 0
    total_artists: int = 0
    total_albums: int = 0
    total_genres: int = 0
    songs_by_genre: Dict[str, int] = field(default_factory=dict)
    songs_by_artist: Dict[str, int] = field(default_factory=dict)
    albums_by_artist: Dict[str, int] = field(default_factory=dict)
    songs_by_album: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "totalSongs": self.total_songs,
            "totalArtists": self.total_artists,
            "totalAlbums": self.total_albums,
            "totalGenres": self.total_genres,
            "songsByGenre": dict(self.songs_by_genre),
            "songsByArtist": dict(self.songs_by_artist),
            "albumsByArtist": dict(self.albums_by_artist),
            "songsByAlbum": dict(self.songs_by_album),
        }

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "Statistics":
        data = data or {}
        return cls(
            total_songs=int(data.get("totalSongs") or 0),
            total_artists=int(data.get("totalArtists") or 0),
            total_albums=int(data.get("totalAlbums") or 0),
            total_genres=int(data.get("totalGenres") or 0),
            songs_by_genre=dict(data.get("songsByGenre") or {}),
            songs_by_artist=dict(data.get("songsByArtist") or {}),
            albums_by_artist=dict(data.get("albumsByArtist") or {}),
            songs_by_album=dict(data.get("songsByAlbum") or {}),
        )
