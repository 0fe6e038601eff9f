"""
API package containing the HTTP routes.

``router.py`` exposes a top‑level ``router`` which includes every
domain‑specific router from ``endpoints``.
"""
