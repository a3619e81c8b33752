"""Exceptions raised by the barcode scan log."""


class ScannerError(Exception):
    """Base class for scanner errors."""


class CameraError(ScannerError):
    """The camera could not be opened or stopped delivering frames."""


class ScannerStartError(ScannerError):
    """The decode source could not be started."""
