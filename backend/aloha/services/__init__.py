"""Business logic layered over the repositories."""
