"""Store, catalog and numbering adapters.

``memory`` has no extra dependencies; ``mongo`` needs motor and ``redis``
needs redis-py (install the ``mongo`` / ``redis`` extras).
"""
