"""Utilitaires partages de HomeFlix."""
