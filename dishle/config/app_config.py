"""
Configuration Management Module

Centralized configuration management following the 12-factor app methodology.
All configuration is loaded from environment variables with sensible defaults.
"""

import os
from dotenv import load_dotenv

_CONFIG_DIR = os.path.dirname(os.path.abspath(__file__))

# Load environment variables from config.env
load_dotenv(os.path.join(_CONFIG_DIR, 'config.env'))


class Config:
    """Base configuration class with all settings."""

    # Flask Settings
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key-change-in-production')
    DEBUG = os.getenv('DEBUG', 'False').lower() == 'true'

    # Server Settings
    HOST = os.getenv('HOST', '127.0.0.1')
    PORT = int(os.getenv('PORT', 5000))

    # Storage Settings ("memory" or "mongo")
    STORAGE_BACKEND = os.getenv('STORAGE_BACKEND', 'memory').lower()
    MONGO_URI = os.getenv('MONGO_URI')
    MONGO_DB = os.getenv('MONGO_DB', 'dishle')

    # Player Token Settings
    PLAYER_TOKEN_SECRET = os.getenv('PLAYER_TOKEN_SECRET', 'dev-player-secret-change-in-production')
    PLAYER_TOKEN_EXPIRATION_DAYS = int(os.getenv('PLAYER_TOKEN_EXPIRATION_DAYS', 365))

    # Puzzle Settings
    PUZZLE_FILE = os.getenv('PUZZLE_FILE', os.path.join(_CONFIG_DIR, 'puzzles.json'))
    PUZZLE_TIMEZONE = os.getenv('PUZZLE_TIMEZONE', 'Europe/Helsinki')

    # Logging Settings
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    LOG_DIR = os.getenv('LOG_DIR', 'logs')


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False


class TestingConfig(Config):
    """Testing configuration."""
    TESTING = True
    DEBUG = True
    STORAGE_BACKEND = 'memory'
    PLAYER_TOKEN_SECRET = 'testing-player-secret-with-enough-bytes'


# Configuration mapping
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
