"""pytest-config: edit a workspace's pytest arguments as a form."""

__version__ = "0.1.0"
