"""
Top-level package for the careershot profile lookup service.

The service exposes a FastAPI app (see `main.py`) with:

- GET /health
- GET /api/user?name=<name>
"""
