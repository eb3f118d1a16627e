"""Pure domain logic: item pricing variants and price formatting."""
