"""BloodBond API — donation requests, their lifecycle, and fund contributions.

The package root has no import side effects; main.py builds the application.
"""
