from .settings import Settings, EstimatorSettings, LogLevel

__all__ = ["Settings", "EstimatorSettings", "LogLevel"]
