# Services package

from app.services.ingestion import SyncResult, ingest_events, sync_repository
from app.services.sensors import SensorService, sensor_service

__all__ = [
    # Ingestion
    "SyncResult",
    "ingest_events",
    "sync_repository",
    # Sensors
    "SensorService",
    "sensor_service",
]
