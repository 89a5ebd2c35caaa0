"""
API orchestration boundary for the Atlas backend.

Design intent:
- Expose thin, typed GET endpoints per macro indicator.
- Keep failure modes predictable: every domain error becomes a 500 with a static message.
- Orchestrate the analyzer without embedding domain logic in routers.
"""
