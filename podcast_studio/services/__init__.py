from .backend import GenerativeBackend

__all__ = ["GenerativeBackend"]
