"""leb - template engine benchmark runner.

Drives template-engine adapters (PHP and Ruby subprocesses) over a shared
scenario corpus, turns their raw timings into comparable metrics, and checks
their rendered output against stored snapshots.
"""

from leb.version import LEB_VERSION, Version

__version__ = str(LEB_VERSION)
__version_info__ = LEB_VERSION

__all__ = [
    "LEB_VERSION",
    "Version",
    "__version__",
    "__version_info__",
]
