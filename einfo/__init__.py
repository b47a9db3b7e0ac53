"""E-Info.me API package: digital profiles, public pages and the admin panel.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
