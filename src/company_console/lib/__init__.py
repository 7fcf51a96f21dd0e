"""
Local library modules shared across the Company Console.

Modules:
    logs: Logging utilities
    objects: Payload key conversion and dataclass serialization
"""

from company_console.lib import logs, objects

__all__ = ["logs", "objects"]
