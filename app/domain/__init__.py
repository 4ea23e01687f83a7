"""
Domain layer containing core business logic and domain services.

Submodules:
- live: Live event provisioning, tracking and teardown over MediaLive.
- utils: Domain-specific utilities (e.g., resource naming).
"""
