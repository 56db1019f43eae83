"""Transcript handling."""
