"""Utility helpers for monolive."""
