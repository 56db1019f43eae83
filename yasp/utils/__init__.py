"""Shared helpers: constants, environment loading, logging and audio input."""
