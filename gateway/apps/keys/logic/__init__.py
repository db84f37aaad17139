"""Business logic for API key authorization."""
