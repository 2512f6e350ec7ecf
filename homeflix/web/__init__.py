"""Interface HTTP de HomeFlix (FastAPI)."""
