"""algorithm subpackage: public API for the recursive comparison engine.

Provides the traversal engine, its configuration, and the introspection
strategy selector.  Import from this module (not from sub-modules directly)
to stay on the stable public interface.

Example::

    from recursive_diff.algorithm import ComparisonConfiguration, RecursiveComparisonEngine

    engine = RecursiveComparisonEngine(ComparisonConfiguration(ignore_collection_order=True))
    engine.compare(["Pratchett", "Martin"], {"Martin", "Pratchett"})
    # []  (order ignored)
"""

from __future__ import annotations

from recursive_diff.algorithm.config import ComparisonConfiguration, IntrospectionStrategy
from recursive_diff.algorithm.engine import RecursiveComparisonEngine

__all__ = ["ComparisonConfiguration", "IntrospectionStrategy", "RecursiveComparisonEngine"]
