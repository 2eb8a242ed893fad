"""Server administration: connected users and licenses."""
