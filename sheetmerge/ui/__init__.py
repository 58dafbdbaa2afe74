"""Terminal output."""

from .summary import ResultPresenter, display_columns

__all__ = ["ResultPresenter", "display_columns"]
