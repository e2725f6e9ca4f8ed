"""
Service module exports
"""
from .batch import run_batch
from .completion import OpenAICompletionClient
from .errors import CatalogError, CompletionError, RunCancelled, WooCopyError
from .generator import DescriptionGenerator
from .publish import build_updates, run_publish
from .run_controller import RunController, RunState
from .store import JsonStore
from .template_engine import render
from .woocommerce import WooCommerceClient
from .workspace import Workspace, get_workspace

__all__ = [
    "run_batch",
    "run_publish",
    "build_updates",
    "render",
    "DescriptionGenerator",
    "OpenAICompletionClient",
    "WooCommerceClient",
    "RunController",
    "RunState",
    "JsonStore",
    "Workspace",
    "get_workspace",
    "WooCopyError",
    "CompletionError",
    "CatalogError",
    "RunCancelled",
]
