"""RefineLab: essay feedback with live writing analysis."""

__version__ = "0.1.0"
