"""
Application Configuration - Central place for app identity
Change these values when renaming the application
"""

# Application Identity
APP_NAME = "FitsConverter"
APP_DISPLAY_NAME = "FITS Converter"
APP_SUBTITLE = "False-color banded renders of FITS image planes"
APP_VERSION = "1.0.0"

# Directory names (used for app data paths)
APP_DATA_FOLDER = APP_NAME  # %LOCALAPPDATA%\{APP_DATA_FOLDER} or ~/.{APP_DATA_FOLDER}

# Environment variable that relocates the app data folder (tests, CI)
APP_HOME_ENV = "FITSCONVERTER_HOME"

# File names
MAIN_CONFIG_FILE = "config.json"
LOG_FILE = "fitsconverter.log"

# Rendering defaults
DEFAULT_BANDING_FACTORS = [1, 2, 10, 20, 50, 100]
DEFAULT_OUTPUT_FORMAT = "bmp"
DEFAULT_FILENAME_PATTERN = "{stem}_{frame}_{mode}_{factor}.{ext}"
