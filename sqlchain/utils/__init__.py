from sqlchain.utils import logging

__all__ = ("logging",)
