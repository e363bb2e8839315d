"""log-search: interactive field search against a single log index."""
