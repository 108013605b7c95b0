"""Normalization helpers and the Scout facade."""
