"""
Configuration management for FITS Converter
"""
import copy
import json
import os

from app_config import (
    DEFAULT_BANDING_FACTORS,
    DEFAULT_FILENAME_PATTERN,
    DEFAULT_OUTPUT_FORMAT,
)
from colorize.models import ALL_PALETTES
from utils_paths import get_config_path
from .logger import app_logger

DEFAULT_CONFIG = {
    # Output settings
    "output_directory": "",  # empty = next to the input FITS file
    "output_format": DEFAULT_OUTPUT_FORMAT,  # "bmp" | "png" | "tiff"
    "filename_pattern": DEFAULT_FILENAME_PATTERN,  # tokens: {stem} {frame} {mode} {factor} {ext}
    "flip_vertical": True,  # FITS row 0 is the bottom of the image

    # Render settings
    "banding_factors": list(DEFAULT_BANDING_FACTORS),
    "palette_modes": [mode.value for mode in ALL_PALETTES],
    "view_window": {
        "start_percent": 0.0,  # 0.0-1.0 of the data range
        "end_percent": 1.0
    },

    # Worker pool width (None = one worker per banding factor, capped at CPU count)
    "max_workers": None,
}


class Config:
    def __init__(self, config_path=None):
        if config_path is None:
            config_path = get_config_path()

        self.config_path = config_path
        self.data = self.load()

    def load(self):
        """Load configuration from JSON file or return defaults"""
        config = copy.deepcopy(DEFAULT_CONFIG)
        if not os.path.exists(self.config_path):
            return config

        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                loaded = json.load(f)
        except (OSError, ValueError) as e:
            app_logger.warning(f"Error loading config {self.config_path}: {e} (using defaults)")
            return config

        # Merge with defaults so new keys exist; nested dicts merge one level deep
        for key, value in loaded.items():
            if isinstance(value, dict) and isinstance(config.get(key), dict):
                config[key].update(value)
            else:
                config[key] = value

        return config

    def save(self):
        """Save current configuration to JSON file"""
        try:
            config_dir = os.path.dirname(self.config_path)
            if config_dir:
                os.makedirs(config_dir, exist_ok=True)
            with open(self.config_path, 'w', encoding='utf-8') as f:
                json.dump(self.data, f, indent=2)
            return True
        except OSError as e:
            app_logger.error(f"Error saving config: {e}")
            return False

    def get(self, key, default=None):
        """Get configuration value"""
        return self.data.get(key, default)

    def set(self, key, value):
        """Set configuration value"""
        self.data[key] = value

    def get_view_window(self):
        """Get (start_percent, end_percent) tuple"""
        window = self.data.get("view_window", {})
        return (
            float(window.get("start_percent", 0.0)),
            float(window.get("end_percent", 1.0)),
        )

    def set_view_window(self, start_percent, end_percent):
        """Set view window percentages"""
        self.data["view_window"] = {
            "start_percent": float(start_percent),
            "end_percent": float(end_percent),
        }
