"""Fetching and parsing bank rate pages."""
