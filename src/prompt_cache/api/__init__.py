"""HTTP front door (FastAPI)."""
