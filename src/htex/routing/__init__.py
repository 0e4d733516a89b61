"""Routing: which file on disk answers a URL path.

There is no route table; the content root's layout is the routing policy.
"""

from htex.routing.resolver import FileResolver, Resolution, ResolutionKind

__all__ = ["FileResolver", "Resolution", "ResolutionKind"]
