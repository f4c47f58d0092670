"""bflow: feature, release and patch branches over master/development."""

__version__ = "0.1.0"
