from querykit.types.base import QueryKitBaseModel

__all__ = ["QueryKitBaseModel"]
