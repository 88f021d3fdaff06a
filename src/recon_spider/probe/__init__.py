"""Liveness probing of discovered URLs."""

from .liveness import categorize_status, run_liveness_probe

__all__ = ["categorize_status", "run_liveness_probe"]
