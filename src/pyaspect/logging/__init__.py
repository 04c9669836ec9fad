"""PyAspect Logging — logging port and structlog adapter."""

from pyaspect.logging.port import LoggingPort
from pyaspect.logging.structlog_adapter import StructlogAdapter

__all__ = ["LoggingPort", "StructlogAdapter"]
