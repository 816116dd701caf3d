"""setup-kced — install the kced binary into a CI runner's tool cache."""

__version__ = "1.0.0"
