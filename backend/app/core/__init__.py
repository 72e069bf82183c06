"""Domain rules for requests, searches and fund records.

Modules here never touch the database, the network or the event loop: they
take values and return values or raise a BloodBondError. Everything with IO
lives in services/ and infrastructure/ and calls into core/.
"""
