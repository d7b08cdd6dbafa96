"""
Interactive planning support.

Provides:
- PlannerSession: add/remove single allocations against a venue pool
- AllocationWorker: run searches off the caller's thread
"""

from .planner import PlannerSession
from .worker import AllocationWorker

__all__ = ['PlannerSession', 'AllocationWorker']
