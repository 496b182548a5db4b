"""Live ride tracking: geodesic distance, route cache, and track accumulation."""

__version__ = "0.1.0"
