"""Helpers for the Tidal catalog client."""
