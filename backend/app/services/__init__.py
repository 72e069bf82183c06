"""Services — the lifecycle manager, query engine, payment reconciler and user accounts.

Each service is built per request from Protocol-typed collaborators
(core/repository_protocols.py), so tests pass in-memory fakes.
"""
