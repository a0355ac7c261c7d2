"""Batch conversion services."""
