"""
Dependency Injection Containers
"""

from .assistance import AssistanceContainer

__all__ = ["AssistanceContainer"]
