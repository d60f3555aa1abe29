"""
FastAPI REST API Layer for ssml-ms.

    - routes.py: Validation endpoints (/v1/ssml/*, /health, /metrics)
    - schemas.py: Request/response Pydantic models
    - dependencies.py: FastAPI dependency injection
"""
