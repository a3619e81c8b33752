# hardware/hardware_controller.py
from gpiozero import RGBLED, DigitalOutputDevice
import threading
import logging
from enum import Enum
from barcode_scanner.config.settings import HardwareConfig

class LEDStatus(Enum):
    """LED status indicators."""
    SUCCESS = "success"          # Green - scan accepted / scanning active
    INFO = "info"                # Blue - idle or informational
    ERROR = "error"              # Red - camera or decoder error
    OFF = "off"                  # All off

LED_COLORS = {
    LEDStatus.SUCCESS: (0, 1, 0),
    LEDStatus.INFO: (0, 0, 1),
    LEDStatus.ERROR: (1, 0, 0),
}

class HardwareController:
    """Scan feedback through an active buzzer and an RGB status LED."""

    def __init__(self, red_pin=HardwareConfig.RED_PIN, green_pin=HardwareConfig.GREEN_PIN,
                 blue_pin=HardwareConfig.BLUE_PIN, buzzer_pin=HardwareConfig.BUZZER_PIN,
                 beep_duration=HardwareConfig.BEEP_DURATION):
        """Initialize hardware controller."""
        self.logger = logging.getLogger(__name__)
        self.beep_duration = beep_duration

        try:
            self.led = RGBLED(red=red_pin, green=green_pin, blue=blue_pin)
            self.logger.info("RGB LED initialized successfully")
        except Exception as e:
            self.logger.error(f"Failed to initialize RGB LED: {e}")
            raise

        try:
            self.buzzer = DigitalOutputDevice(
                buzzer_pin,
                active_high=True,
                initial_value=False
            )
            self.logger.info("Active buzzer initialized successfully")
        except Exception as e:
            self.led.close()
            self.logger.error(f"Failed to initialize buzzer: {e}")
            raise

        self._current_status = LEDStatus.OFF
        self._led_lock = threading.Lock()
        self._buzzer_lock = threading.Lock()
        self._buzzer_timer = None

    def set_status(self, status):
        """Set LED status indicator from an LEDStatus or a severity name."""
        try:
            if not isinstance(status, LEDStatus):
                status = LEDStatus(status)
            with self._led_lock:
                if status == LEDStatus.OFF:
                    self.led.off()
                else:
                    self.led.color = LED_COLORS[status]
                self._current_status = status
            self.logger.debug(f"LED status set to: {status.value}")

        except Exception as e:
            self.logger.error(f"Error setting LED status: {e}")

    def get_status(self) -> LEDStatus:
        """Get current LED status."""
        return self._current_status

    def _stop_buzzer_timer(self):
        """Cancel any existing buzzer timer."""
        if self._buzzer_timer is not None:
            self._buzzer_timer.cancel()
            self._buzzer_timer = None

    def _delayed_buzzer_stop(self):
        """Stop the buzzer and clear the timer."""
        try:
            self.buzzer.off()
            self._buzzer_timer = None
        except Exception as e:
            self.logger.error(f"Error stopping buzzer: {e}")

    def notify(self):
        """Play a short beep for an accepted scan. Never raises."""
        try:
            with self._buzzer_lock:
                self._stop_buzzer_timer()
                self.buzzer.on()
                self._buzzer_timer = threading.Timer(self.beep_duration, self._delayed_buzzer_stop)
                self._buzzer_timer.daemon = True
                self._buzzer_timer.start()

            self.logger.debug("Played barcode scan sound")

        except Exception as e:
            self.logger.error(f"Error playing barcode sound: {e}")
            try:
                self.buzzer.off()
            except Exception as off_error:
                self.logger.error(f"Error silencing buzzer: {off_error}")

    def cleanup(self):
        """Clean up hardware resources."""
        try:
            self.set_status(LEDStatus.OFF)

            with self._buzzer_lock:
                self._stop_buzzer_timer()
            self.buzzer.off()
            self.buzzer.close()
            self.led.close()

            self.logger.info("Hardware resources cleaned up")

        except Exception as e:
            self.logger.error(f"Error cleaning up hardware resources: {e}")
