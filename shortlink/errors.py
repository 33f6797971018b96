"""Exceptions raised by the shortener core."""


class ShortenerError(Exception):
    """Base class for shortener failures surfaced as server errors."""


class RetryExhaustedError(ShortenerError):
    """No free short code was found within the retry budget."""
    
    def __init__(self, attempts: int):
        super().__init__(f"Unable to generate unique short code after {attempts} attempts")
        self.attempts = attempts


class PersistenceError(ShortenerError):
    """Reading or writing the snapshot failed."""


class SnapshotCorruptError(PersistenceError):
    """The snapshot exists but cannot be parsed."""
