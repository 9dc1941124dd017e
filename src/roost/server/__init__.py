"""Server plumbing — ASGI translation, negotiation, error mapping, serving."""
