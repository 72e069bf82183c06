"""HTTP layer — routers, Depends providers and the error envelope.

Routes parse and shape payloads only; every decision is taken in services/.
"""
