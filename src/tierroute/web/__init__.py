"""Optional FastAPI surface for a routing controller."""
