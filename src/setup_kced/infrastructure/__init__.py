"""Infrastructure layer — runner protocol, releases API, downloads, tool cache.

Infrastructure may import from domain and config, never from services,
commands, or output.
"""
