"""
Planning artifacts.

Writers that persist a scheduled broadcast day once it has been built.
"""

from storecast.planning.playlist_artifact_writer import (
    PlaylistArtifactExistsError,
    PlaylistArtifactWriter,
)

__all__ = ["PlaylistArtifactExistsError", "PlaylistArtifactWriter"]
