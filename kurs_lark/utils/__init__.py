"""Shared helpers for :mod:`kurs_lark`."""
