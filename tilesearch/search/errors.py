"""
Exceptions raised by the search engine.

Expected outcomes (no path, bad start/goal, cancellation) are reported in
the SearchResult instead of raised. Only broken bookkeeping raises.
"""


class SearchError(Exception):
    """Base class for search engine errors."""


class MalformedRecordError(SearchError):
    """
    Node record bookkeeping is inconsistent.

    Raised, for example, when a predecessor has no record during path
    reconstruction or when two records exist for one node. This is a bug in
    the engine; the failing search is aborted.
    """


class SearchCancelled(SearchError):
    """Raised inside a run to unwind it after cancel(); never escapes the run."""
