"""Presenters that format export results for the terminal."""

from .summary import SummaryPresenter, SummaryRequest

__all__ = ["SummaryPresenter", "SummaryRequest"]
