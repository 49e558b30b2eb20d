"""Backend services for statutax."""
