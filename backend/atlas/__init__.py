"""
Macro indicator analysis boundary for the Atlas backend.

Design intent:
- Fetch FRED observation series and derive one headline value per indicator.
- Map each value to a clamped 0-100 risk score with fixed policy constants.
- Select canned recommendation text from an immutable bucket table.
"""
