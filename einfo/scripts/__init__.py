"""Maintenance scripts, run as `python -m einfo.scripts.<name>`."""
