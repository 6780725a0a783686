"""Sous-package CLI - outils de diagnostic (typer)."""
