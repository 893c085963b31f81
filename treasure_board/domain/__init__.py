"""Domain layer (pure logic).

- Keep board rules, commitment checks and payout calculations here.
- Avoid I/O: no DB sessions, no HTTP/FastAPI, no logging of transfers.
- Prefer deterministic functions (entropy is passed in as a seed).
"""
