"""Engine selection by time of day."""

from .selector import AgenticTool, EngineDecision, PrimaryEngine, riyadh_hour, select_engine

__all__ = ["AgenticTool", "EngineDecision", "PrimaryEngine", "riyadh_hour", "select_engine"]
