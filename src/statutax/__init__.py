"""Statutory levy and payroll withholding calculations."""
