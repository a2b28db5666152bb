"""Value-driver ROI calculator."""

__version__ = "0.1.0"
