from medshop.models.collection import CollectionDocument

__all__ = ["CollectionDocument"]
