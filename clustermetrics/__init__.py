"""Time-series metrics pipeline for the cluster monitoring dashboard."""

__version__ = "0.1.0"
