"""Adapters — SQL repositories, the Stripe gateway, the DB session manager, logging.

Implements the Protocols in core/repository_protocols.py; provider and driver
failures leave this package as BloodBondError subclasses.
"""
