"""Board-game catalog.

Layered like the rest of the codebase:

  catalog/domain/          entities and value objects (Game, FilterSet, GameCard)
  catalog/services/        pure pipeline stages and use cases
  catalog/infrastructure/  repository and store adapters (loader/persistence ports)
  catalog/core/            configuration, logging and the error taxonomy
"""
