"""
API routes module.

FastAPI application, routers and dependency wiring.
"""
