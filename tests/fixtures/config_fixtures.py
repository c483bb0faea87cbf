"""
Configuration test fixtures.
"""

# =============================================================================
# Configuration Fixtures
# =============================================================================

SAMPLE_CONFIG = {
    "storage": {"database": "data/test.db"},
    "locked_workspaces_file": "locked-workspaces.json",
    "logging": {
        "level": "INFO",
        "format": "text",
    },
}

MINIMAL_CONFIG = {}
