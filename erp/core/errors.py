"""
core/errors.py
──────────────
Turns store exceptions into the short messages shown to staff.
"""

_DUPLICATE_MARKERS = ('duplicate', 'unique')


def is_duplicate_error(exc) -> bool:
    text = str(exc).lower()
    return any(marker in text for marker in _DUPLICATE_MARKERS)


def friendly_error(exc, default='Something went wrong. Please try again.', duplicate=None):
    """
    Pick the message to flash for *exc*.

    - *duplicate* is used when the store reported a uniqueness violation
      and the caller knows what that means on its screen.
    - otherwise the raw message, or *default* when it is empty.
    """
    if duplicate and is_duplicate_error(exc):
        return duplicate
    return str(exc) or default
