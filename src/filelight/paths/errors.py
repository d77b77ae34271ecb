"""Path confinement errors."""


class ConfinementError(Exception):
    """Raised when a requested path escapes the browse root or does not exist."""
