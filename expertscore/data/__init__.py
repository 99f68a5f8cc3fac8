"""Loading expert aggregates and question entities."""
