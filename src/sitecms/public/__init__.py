"""Public (unauthenticated) site endpoints and page cache."""
