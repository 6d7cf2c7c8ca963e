"""
Clinic API Layer

FastAPI routes, request/response schemas and use case dependencies.
"""
