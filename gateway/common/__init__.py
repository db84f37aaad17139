"""Cross-app building blocks: error taxonomy, middleware, request parsing."""
