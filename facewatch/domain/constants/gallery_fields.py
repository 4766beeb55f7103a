class GalleryFields:
    """JSON field names of a persisted gallery record"""
    ID = "id"
    NAME = "name"
    DEPARTMENT = "department"
    POSITION = "position"
    EMAIL = "email"
    PHONE = "phone"
    EMBEDDING = "embedding"
    CREATED_AT = "createdAt"
    UPDATED_AT = "updatedAt"
    SCHEMA_VERSION = "schemaVersion"

    PROFILE_FIELDS = ("name", "department", "position", "email", "phone")
