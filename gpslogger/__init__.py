"""
GPS Logger

Personal location logger: background sampling into a persisted log,
a live log view, plain-text export, and posting the current location.
"""

__version__ = "1.0.0"
