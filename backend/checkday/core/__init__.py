"""Functional core - checklist rules with no I/O."""
