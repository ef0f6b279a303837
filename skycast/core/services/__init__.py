from .orchestrator import QueryOrchestrator
from .resolution import WeatherResolver

__all__ = ["QueryOrchestrator", "WeatherResolver"]
