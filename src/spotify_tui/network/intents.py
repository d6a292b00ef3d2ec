"""Outbound requests from the key handlers to the network worker."""

from dataclasses import dataclass, field
from typing import Any

ACTIONS = frozenset(
    {
        # Playback
        "get_current_playback",
        "start_playback",
        "pause_playback",
        "next_track",
        "previous_track",
        "seek",
        "shuffle",
        "repeat",
        "change_volume",
        "add_item_to_queue",
        "get_devices",
        "transfer_playback_to_device",
        # Library pages
        "get_user",
        "get_playlists",
        "get_playlist_tracks",
        "get_current_saved_tracks",
        "get_current_user_saved_albums",
        "get_followed_artists",
        "get_recently_played",
        "get_made_for_you",
        "get_made_for_you_playlist_tracks",
        "get_current_user_saved_shows",
        "get_show_episodes",
        # Lookups
        "get_search_results",
        "get_album",
        "get_album_tracks",
        "get_artist",
        "get_recommendations_for_seed",
        "get_audio_analysis",
        # Library mutations
        "toggle_save_track",
        "current_user_saved_album_add",
        "current_user_saved_album_delete",
        "user_follow_artists",
        "user_unfollow_artists",
        "user_follow_playlist",
        "user_unfollow_playlist",
        "user_follow_show",
        "user_unfollow_show",
        "add_track_to_playlist",
    }
)


@dataclass
class Intent:
    """Request for a remote API action, processed in submission order."""

    action: str
    data: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.action not in ACTIONS:
            raise ValueError(f"Unknown intent action: {self.action}")
