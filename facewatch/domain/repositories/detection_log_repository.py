from abc import ABC, abstractmethod
from typing import List
from ..models.detection_log_entry import DetectionLogEntry


class DetectionLogRepository(ABC):
    """Repository interface - defines contract for day-scoped detection logs"""

    @abstractmethod
    def append(self, entry: DetectionLogEntry) -> None:
        """Append one record to the camera's log for the entry's day"""
        pass

    @abstractmethod
    def get_logs(self, camera: str, date: str) -> List[DetectionLogEntry]:
        """Records for one camera (or "all") on a YYYY-MM-DD date"""
        pass

    @abstractmethod
    def list_cameras(self, date: str) -> List[str]:
        """Cameras that have a log for the date"""
        pass
