"""HTTP middleware: request correlation and request/response logging."""
