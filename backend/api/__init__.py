"""
API module.

FastAPI application factory, dependencies and routers for all HTTP endpoints.
"""
