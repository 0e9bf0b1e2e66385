"""Suite plumbing: configuration, discovery, runner."""
