class DetectionLogFields:
    """JSON field names of a persisted detection log record"""
    TIMESTAMP = "timestamp"
    CAMERA = "camera"
    IDENTITY = "identity"
    CONFIDENCE = "confidence"
    BOUNDING_BOX = "boundingBox"
    USER_ID = "userId"
