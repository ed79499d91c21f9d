"""Formatting helpers for consistent CLI reporting."""

from __future__ import annotations
import click

from ..curation import CurationResult
from ..providers import Playlist, Track


def format_track_line(track: Track, index: int | None = None) -> str:
    """Format a track as ``Name - Artist, Artist`` with an optional 1-based index."""
    line = f"{track.name} - {track.artist_line}" if track.artists else track.name
    if index is not None:
        line = f"{click.style(f'{index:>2}.', fg='cyan')} {line}"
    return line


def format_playlist_choice(index: int, playlist: Playlist) -> str:
    return f"> {index}. {playlist.name} ({playlist.track_total})"


def format_curation_summary(result: CurationResult, target_count: int, duration_seconds: float = 0.0) -> str:
    """Format a summary line with colored counts.

    Args:
        result: Curation result
        target_count: Requested number of segments
        duration_seconds: Total duration in seconds
    """
    filled = len(result.tracks)
    color = 'green' if filled >= target_count else 'yellow'
    parts = [
        click.style('✓', fg='green') if filled else click.style('✗', fg='red'),
        "Power hour:",
        click.style(f'{filled}/{target_count} segments', fg=color),
        click.style(f'{result.eligible_count} eligible', fg='blue'),
        f"of {result.fetched_count} entries",
    ]
    if duration_seconds > 0:
        parts.append(f"in {duration_seconds:.2f}s")
    return " ".join(parts)


__all__ = ["format_track_line", "format_playlist_choice", "format_curation_summary"]
