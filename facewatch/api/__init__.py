"""
API layer for the face recognition backend.

Exposes HTTP endpoints under /api/face-recognition (gallery, monitoring,
settings, logs, snapshots) and /api (media server camera paths, health).
"""
