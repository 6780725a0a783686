"""Utilitaires partages (constantes)."""
