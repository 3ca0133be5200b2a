"""
Engineering health sensors.

Usage: `from app.services.sensors import sensor_service, compute_codebase_age`

Module structure:
- service.py: SensorService (loads event windows, dispatches to the sensors)
- time_sink.py / truck_factor.py / pulse.py: Pure computations over events
- codebase_age.py: Stack heuristics over package.json and tsconfig.json
- demo.py: Deterministic demo-mode data
- common.py: Windows, rounding and path filters
"""

from app.services.sensors.codebase_age import analyze_stack, compute_codebase_age
from app.services.sensors.common import DAY_MS, TimeWindow, build_windows, now_ms
from app.services.sensors.pulse import compute_pulse
from app.services.sensors.service import SensorService, sensor_service
from app.services.sensors.time_sink import compute_time_sink
from app.services.sensors.truck_factor import compute_truck_factor

__all__ = [
    "SensorService",
    "sensor_service",
    "analyze_stack",
    "compute_codebase_age",
    "compute_pulse",
    "compute_time_sink",
    "compute_truck_factor",
    "DAY_MS",
    "TimeWindow",
    "build_windows",
    "now_ms",
]
