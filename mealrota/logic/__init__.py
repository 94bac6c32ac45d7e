"""Core business logic layer.

Subpackages:
- scheduling: seeded random source, cook availability, rotation scheduler, date projection
- shopping: grocery list aggregation
- planner: pure state transitions and the session that owns the current state
"""
__all__ = ["scheduling", "shopping", "planner"]
