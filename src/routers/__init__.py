"""API routers for the profiling server."""

from src.routers import evaluations, health, proctoring, profiles, saved_reports, scores

__all__ = ["evaluations", "health", "proctoring", "profiles", "saved_reports", "scores"]
