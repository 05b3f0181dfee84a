class AlarmError(Exception):
    """Raised when alarm synthesis or playback fails."""
