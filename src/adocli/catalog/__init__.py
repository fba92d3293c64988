"""Operation catalog -- every REST operation the tool knows how to call.

Typical usage::

    from adocli.catalog import load_catalog

    catalog = load_catalog()
    for area, operation in catalog.get_exact("list-pull-requests"):
        print(area, operation.verb.value, operation.url_template)

Sub-modules:

* :mod:`~adocli.catalog.loader` -- reads and validates the catalog document.
* :mod:`~adocli.catalog.catalog` -- :class:`Catalog`, the immutable
  lookup structure.
"""

from adocli.catalog.catalog import Catalog
from adocli.catalog.loader import build_catalog, load_catalog

__all__ = ["Catalog", "build_catalog", "load_catalog"]
