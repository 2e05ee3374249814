"""Helpers for working with async response streams."""

from .tee import TeeIterator, tee

__all__ = ["TeeIterator", "tee"]
