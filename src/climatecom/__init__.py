"""Climate FieldView command-line client.

Subpackages:
- climatecom.core: Configuration, errors and API client
- climatecom.cli: Command-line interface and output rendering
"""

from climatecom.core import ClimateError, ConfigStore, Settings, client

__all__ = [
    "client",
    "ClimateError",
    "ConfigStore",
    "Settings",
]

__version__ = "1.0.0"
