"""Planner adapters - Implementations of the QueryPlannerPort."""

from .json_planner import JsonQueryPlanner

__all__ = ["JsonQueryPlanner"]
