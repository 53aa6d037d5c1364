"""Configuration store module for tenantscope."""

from tenantscope.store.adapter import ConfigurationStore
from tenantscope.store.config import DatabaseConfig, create_store
from tenantscope.store.sql import SqlConfigurationStore
from tenantscope.store.types import OVERRIDE_SECTIONS, Hierarchy, OverrideSet

__all__ = [
    "ConfigurationStore",
    "DatabaseConfig",
    "create_store",
    "SqlConfigurationStore",
    "OVERRIDE_SECTIONS",
    "Hierarchy",
    "OverrideSet",
]
