"""Repeater errors."""


class RepeaterError(Exception):
    """Raised on failed registration or an invalid lifecycle transition."""

    pass
