import time

import pytest
from gpiozero import Device
from gpiozero.pins.mock import MockFactory, MockPWMPin

from barcode_scanner.hardware.hardware_controller import HardwareController, LEDStatus


@pytest.fixture
def controller():
    Device.pin_factory = MockFactory(pin_class=MockPWMPin)
    hw = HardwareController(beep_duration=0.2)
    yield hw
    hw.cleanup()
    Device.pin_factory.reset()
    Device.pin_factory = None


def test_notify_beeps_briefly(controller):
    controller.notify()
    assert controller.buzzer.is_active
    deadline = time.time() + 2
    while controller.buzzer.is_active and time.time() < deadline:
        time.sleep(0.01)
    assert not controller.buzzer.is_active


def test_status_colors(controller):
    controller.set_status("error")
    assert controller.led.value == (1, 0, 0)
    assert controller.get_status() == LEDStatus.ERROR

    controller.set_status(LEDStatus.SUCCESS)
    assert controller.led.value == (0, 1, 0)

    controller.set_status(LEDStatus.OFF)
    assert controller.led.value == (0, 0, 0)


def test_unknown_status_is_ignored(controller):
    controller.set_status("info")
    controller.set_status("sparkle")
    assert controller.get_status() == LEDStatus.INFO


def test_notify_swallows_buzzer_errors(controller, monkeypatch):
    def broken():
        raise RuntimeError("pin fault")

    monkeypatch.setattr(controller.buzzer, "on", broken)
    controller.notify()
