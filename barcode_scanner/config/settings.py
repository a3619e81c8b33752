# barcode_scanner/config/settings.py
"""Configuration settings for the barcode scan log."""
import os
from dataclasses import dataclass


def _env_float(name, default):
    value = os.getenv(name)
    return float(value) if value else default


def _env_int(name, default):
    value = os.getenv(name)
    return int(value) if value else default


@dataclass
class CameraConfig:
    DEVICE_INDEX = _env_int("SCAN_CAMERA_INDEX", 0)
    IDEAL_RESOLUTION = (1280, 720)
    MIN_RESOLUTION = (640, 480)
    FRAME_RATE = 30
    SCAN_AREA_MARGIN = 0.2  # Fraction cropped from each edge before decoding


@dataclass
class ScanConfig:
    COOLDOWN = _env_float("SCAN_COOLDOWN", 3.0)
    CONFIRMATIONS = _env_int("SCAN_CONFIRMATIONS", 2)
    MAX_ERROR = 0.15
    MIN_CODE_LENGTH = 8
    HISTORY_LIMIT = _env_int("SCAN_HISTORY_LIMIT", 25)
    FRAME_INTERVAL = 1.0 / 20  # Decode at most 20 frames per second
    SYMBOLOGIES = (
        "CODE128",
        "EAN13",
        "EAN8",
        "CODE39",
        "UPCA",
        "UPCE",
        "CODABAR",
    )


@dataclass
class PathConfig:
    BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    DATA_DIR = os.getenv("SCAN_DATA_DIR", os.path.join(os.path.expanduser("~"), ".barcode_scanner"))
    LOG_DIR = os.path.join(DATA_DIR, 'logs')
    HISTORY_PATH = os.getenv("SCAN_HISTORY_PATH", os.path.join(DATA_DIR, 'scan_history.json'))


@dataclass
class HardwareConfig:
    ENABLED = os.getenv("SCAN_GPIO_FEEDBACK", "0") == "1"
    RED_PIN = 17
    GREEN_PIN = 27
    BLUE_PIN = 22
    BUZZER_PIN = 18
    BEEP_DURATION = 0.2
