"""Command-line interface for tenantscope."""
