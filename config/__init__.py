"""Configuration module for the router catalog and rule settings."""

from .loader import ConfigLoader, RouterDefaults, load_config
from .settings import (
    SettingsImportError,
    SettingsUpdate,
    settings_filename,
    dump_settings,
    parse_settings,
    export_settings,
    read_settings,
    read_settings_text,
)
from .logger_config import setup_logger

__all__ = [
    'ConfigLoader',
    'RouterDefaults',
    'load_config',
    'SettingsImportError',
    'SettingsUpdate',
    'settings_filename',
    'dump_settings',
    'parse_settings',
    'export_settings',
    'read_settings',
    'read_settings_text',
    'setup_logger',
]
