"""
Configuration Package

Contains all configuration-related files and settings.

This package separates two types of configuration:
- app_config.py: Flask application configuration (environment-based)
- game_settings.py: Game rules and constants (business logic)
"""

from .app_config import Config, DevelopmentConfig, ProductionConfig, TestingConfig, config
from .game_settings import (
    STARTING_QUALITY, MIN_INGREDIENT_LENGTH, MAX_INGREDIENT_LENGTH,
    PUZZLE_TIMEZONE, validate_game_settings
)

__all__ = [
    # App configuration
    'Config', 'DevelopmentConfig', 'ProductionConfig', 'TestingConfig', 'config',
    # Game rules
    'STARTING_QUALITY', 'MIN_INGREDIENT_LENGTH', 'MAX_INGREDIENT_LENGTH',
    'PUZZLE_TIMEZONE', 'validate_game_settings'
]
