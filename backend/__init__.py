"""
Atlas backend package.

Design intent:
- Serve macro indicator snapshots (value, risk, recommendation) over HTTP.
- Keep domain modules (atlas) independent from the API wiring.
"""
