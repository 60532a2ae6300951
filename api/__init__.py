"""
FastAPI REST API for the Booky book service.

This package provides:
- CRUD routes for the book resource
- Translation of store failures into JSON error responses
"""
