"""Satis configuration generation."""
