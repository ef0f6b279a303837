from .base import AIServiceProvider, RequestConfig
from .gemini import GeminiWeatherProvider

__all__ = ["AIServiceProvider", "GeminiWeatherProvider", "RequestConfig"]
