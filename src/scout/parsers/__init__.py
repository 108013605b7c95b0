"""Deterministic parsers that turn tip text into structured signal."""

from .entity_parser import extract_entities, extract_name_candidates

__all__ = ["extract_entities", "extract_name_candidates"]
