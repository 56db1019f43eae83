"""Decoding engine adapters."""
