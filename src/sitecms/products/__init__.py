"""Product catalogue: featured flag management for the home page."""
