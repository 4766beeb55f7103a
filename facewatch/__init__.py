"""
FaceWatch Backend Application - root package.

This package contains the FastAPI app entry point (main.py), API routes,
domain models, infrastructure (JSON storage, camera HTTP client, media
server config) and the face recognition processing pipeline.
"""
