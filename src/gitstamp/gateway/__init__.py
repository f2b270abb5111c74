"""Gateways isolating gitstamp from libgit2 and the plugin layout."""
