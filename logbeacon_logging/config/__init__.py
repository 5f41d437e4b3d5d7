"""
Logging Configuration

Holds log_levels.json: default verbose level, per-logger overrides and the
optional rotating file output.
"""
