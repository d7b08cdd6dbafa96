"""
Reporting on corridor traffic.
"""

from .traffic_report import (
    CongestionLevel, ReportConfig, CorridorLoad, TrafficReport,
    build_traffic_report
)

__all__ = [
    'CongestionLevel', 'ReportConfig', 'CorridorLoad', 'TrafficReport',
    'build_traffic_report'
]
