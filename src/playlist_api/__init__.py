"""Playlist API — users, bearer-token auth, playlists and songs.

A small HTTP service where each user manages their own playlists.
Every playlist and song route is scoped to the user resolved from
the request's bearer token.
"""

__version__ = "0.1.0"
