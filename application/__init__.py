"""
Application layer: Use cases and workflow orchestration.

This layer coordinates between domain logic and infrastructure,
implementing the render workflow (paths -> grouped tree), the focus view,
and the JSON artifacts written for each run.
"""

from application.render import render_focus_view, render_tree
from application.serialize import (
    match_to_dict,
    save_search_result,
    save_tree,
    search_result_to_dict,
    tree_to_dict,
)
from application.workflow import TreeSession, load_and_render

__all__ = [
    # Main workflows
    "load_and_render",
    "TreeSession",
    "render_tree",
    "render_focus_view",
    # Serialization
    "tree_to_dict",
    "match_to_dict",
    "search_result_to_dict",
    "save_tree",
    "save_search_result",
]
