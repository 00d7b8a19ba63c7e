from .loader import load_config
from .log import configure_logging
from .models import (
    DiskConfig,
    ParserConfig,
    ReclaimConfig,
    ReportConfig,
)

__all__ = [
    "DiskConfig",
    "ParserConfig",
    "ReclaimConfig",
    "ReportConfig",
    "configure_logging",
    "load_config",
]
