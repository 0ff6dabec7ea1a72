"""Domain entities and rules, free of storage and HTTP concerns."""
