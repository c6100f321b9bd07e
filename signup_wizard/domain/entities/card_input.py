from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CardInput:
    """
    Output of the embedded card widget. The widget tokenizes in the browser,
    so only the token id (or the widget's error message) reaches this service.
    """

    complete: bool = False
    token: str | None = None
    error: str | None = None
