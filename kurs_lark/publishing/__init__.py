"""Batching and Lark Sheets publishing."""
