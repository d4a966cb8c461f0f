"""
Configuration for the power component classifier
Reads from environment variables with sensible defaults
"""
import os

# Logging
LOG_LEVEL = os.getenv('POWERMAP_LOG_LEVEL', 'INFO')

# Missing-opcode diagnostics: once per distinct opcode (default) or on every lookup
REPORT_EVERY = os.getenv('POWERMAP_REPORT_EVERY', 'false').lower() == 'true'

# Raise UnclassifiedOpcode instead of falling back to OTHER (maintenance runs only)
STRICT = os.getenv('POWERMAP_STRICT', 'false').lower() == 'true'
