"""Client side: REST client, local mirror and the synchronizing orchestrator."""
from songdeck.client.api import ApiError, SongsApiClient
from songdeck.client.mirror import ClientMirror, Concern, RequestState, RequestStatus
from songdeck.client.orchestrator import SyncOrchestrator

__all__ = [
    "ApiError",
    "ClientMirror",
    "Concern",
    "RequestState",
    "RequestStatus",
    "SongsApiClient",
    "SyncOrchestrator",
]
