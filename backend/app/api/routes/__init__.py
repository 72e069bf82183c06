"""One router per resource: donation requests, payments, users, health."""
