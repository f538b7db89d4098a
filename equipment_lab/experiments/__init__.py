"""Runnable experiments: ``python -m equipment_lab.experiments.<name>``."""
