"""Utilitários auxiliares do flowscript (sem dependência do core)."""
