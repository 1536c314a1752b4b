"""Shared service utilities (HTTP session)."""
