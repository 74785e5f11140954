class TOTPError(Exception):
    """Base class for every error raised while computing a code."""


class InvalidBase32(TOTPError, ValueError):
    """The secret is not unpadded RFC 4648 Base32."""


class InvalidInterval(TOTPError, ValueError):
    """The time step is not a positive number of seconds."""


class InvalidDigits(TOTPError, ValueError):
    """The requested code length is out of range."""


class ClockError(TOTPError):
    """The system clock could not provide a usable Unix time."""


class InvalidEpoch(TOTPError, ValueError):
    """The epoch is not a non-negative Unix time in whole seconds."""
