"""Install prebuilt CLI tools from GitHub releases."""

__version__ = "0.1.0"
