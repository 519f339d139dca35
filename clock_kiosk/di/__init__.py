from .repository import InMemoryRepository, Repository
from .service import Service

__all__ = ["InMemoryRepository", "Repository", "Service"]
