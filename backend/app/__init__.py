"""Repair estimator backend, organised following Clean Architecture.

Layers:
- domain: entities, repository contracts and use cases (cost estimate, location resolution, shop ranking)
- data: Google Places client, local location directory and repository implementations
- presentation: FastAPI routers and response models
- core: configuration, DI, logging and small shared utilities (distance, fallback chains)
"""
