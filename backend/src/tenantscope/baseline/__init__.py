"""Platform baseline module for tenantscope."""

from tenantscope.baseline.types import TEMPLATE_KINDS, BusinessTemplate, PlatformBaseline
from tenantscope.baseline.loader import BaselineLoader, check_baseline_integrity
from tenantscope.baseline.validator import ValidationIssue, validate_baseline_dir, validate_yaml_file

__all__ = [
    "TEMPLATE_KINDS",
    "BusinessTemplate",
    "PlatformBaseline",
    "BaselineLoader",
    "check_baseline_integrity",
    "ValidationIssue",
    "validate_baseline_dir",
    "validate_yaml_file",
]
