"""Host adapters for UI frameworks."""
