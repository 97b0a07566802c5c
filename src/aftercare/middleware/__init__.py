"""HTTP middleware: request correlation and response hardening."""
