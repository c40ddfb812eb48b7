"""Slotwise — calendar availability and productivity scoring for the assistant.

Components:
    config_models.py: Validated configuration loaded from args/*.yaml
    logging_config.py: structlog setup for CLI entry points
    office/: Calendar models, providers, and the scheduling engine
"""

from pathlib import Path


PROJECT_ROOT = Path(__file__).parent.parent
ARGS_DIR = PROJECT_ROOT / "args"

__version__ = "0.1.0"
