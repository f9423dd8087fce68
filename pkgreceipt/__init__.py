"""pkgreceipt: durable, versioned install receipts for packages.

A receipt records how a single package was installed:
  - which tool version installed it and from which source / repository revision
  - the dependency versions it was pinned against at install time
  - the CPU architecture and build environment of the host
  - whether it was installed on request or pulled in as a dependency
  - which artifacts the package declared
"""

__version__ = "0.3.0"
__description__ = "Durable, versioned install receipts for packages"

from pkgreceipt.core.factory import ReceiptFactory
from pkgreceipt.core.receipt_store import ReceiptStore
from pkgreceipt.models.receipt import Receipt

__all__ = ["Receipt", "ReceiptFactory", "ReceiptStore", "__version__"]
