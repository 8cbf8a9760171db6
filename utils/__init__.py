"""
Utils package - Shared utility functions.
"""

from utils.classifier import ReleaseClassifier, is_target, extract_model_token
from utils.config import EnvConfig
from utils.logger import setup_logging

__all__ = ['ReleaseClassifier', 'is_target', 'extract_model_token', 'EnvConfig', 'setup_logging']
