# errors.py

"""
Exception types raised by the particle engine.

Both indicate a caller mistake; neither is retried or caught inside the frame loop.
"""


class InvalidArgumentError(ValueError):
    """A malformed character or an unrecognized behavior tag was passed in."""


class PreconditionViolation(RuntimeError):
    """An update was requested on a particle whose construction-time invariants are broken."""
