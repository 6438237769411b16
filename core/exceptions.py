class AppError(Exception):
    """A user-facing failure. The message is flashed back to the user as-is."""
