from .conv import to_dec_strict

__all__ = ["to_dec_strict"]
