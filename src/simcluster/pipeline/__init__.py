"""Batch clustering pipeline."""
