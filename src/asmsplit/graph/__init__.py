"""Graph algorithms over function reference edges."""
