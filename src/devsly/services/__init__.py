"""Per-resource wrappers over the request engine."""

from .base import RequestEngine, Service
from .code_analysis import CodeAnalysis
from .developer_tools import DeveloperTools
from .load_testing import LoadTesting
from .network import NetworkTools

__all__ = ["RequestEngine", "Service", "NetworkTools", "LoadTesting", "DeveloperTools", "CodeAnalysis"]
