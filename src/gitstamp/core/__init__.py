"""Version report core: locator, staleness detector, aggregator and cache store."""
