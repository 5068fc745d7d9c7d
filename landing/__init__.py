"""Landing page content service: settings, buttons and game gallery."""

__version__ = "1.0.0"
