"""Utility modules for the long multiplication calculator."""

from .config import Config, ConfigLoader, load_config
from .exporter import Exporter
from .logging_db import SQLiteHandler, LoggingDatabase, setup_db_logging

__all__ = ['Config', 'ConfigLoader', 'load_config', 'Exporter',
           'SQLiteHandler', 'LoggingDatabase', 'setup_db_logging']
