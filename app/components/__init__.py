"""Reusable UI components for the Date Range Slicer demo."""

from .date_slicer import render_date_slicer

__all__ = ["render_date_slicer"]
