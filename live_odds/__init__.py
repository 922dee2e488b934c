"""Live odds board: historical snapshot plus a simulated push feed."""

__version__ = "0.1.0"
