"""Patch construction helpers."""

from .patch import PatchBuilder

__all__ = ["PatchBuilder"]
