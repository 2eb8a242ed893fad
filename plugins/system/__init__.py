"""Console housekeeping commands shared by every host."""
