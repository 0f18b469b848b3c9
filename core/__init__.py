"""Cache layer, matching and presentation for OSRS price lookups."""
