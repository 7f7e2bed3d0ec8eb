"""Home page hero settings: editing, image reconciliation, persistence."""
