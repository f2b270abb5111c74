"""Click command-line adapter and presentation layer."""
