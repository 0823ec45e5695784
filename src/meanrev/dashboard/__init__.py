"""Dashboard layer -- FastAPI JSON API over the signal scanner."""
