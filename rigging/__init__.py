__path__ = __import__("pkgutil").extend_path(__path__, __name__)  # NOQA: F-821
__title__ = 'rigging'
__author__ = 'Rigging Developers'
__license__ = 'BSD-2-Clause'
# Placeholder, modified by dynamic-versioning.
__version__ = "0.0.0"

from .commandline import *
from .configfile import *
from .faults import *
from .options import *
from .registry import *
from .text import *
from .values import *

# Library logging stays silent until the embedding application configures it.
__import__("logging").getLogger(__name__).addHandler(__import__("logging").NullHandler())

VersionInfo = __import__("collections").namedtuple("VersionInfo", (
    "major",
    "minor",
    "micro",
    "releaselevel",
    "serial",
    "metadata"
))

# Placeholder, modified by dynamic-versioning.
version_info = VersionInfo(0, 0, 0, "final", 0, "")

__all__ = (
    "__path__",
    "__title__",
    "__author__",
    "__license__",
    "__version__",
    "version_info"
)

# Load the exposed API of the argument-vector parser
__all__ += commandline.__all__  # type: ignore[attr-defined]
# Load the exposed API of the config-file parser
__all__ += configfile.__all__  # type: ignore[attr-defined]
# Load the exposed API of the faults
__all__ += faults.__all__  # type: ignore[attr-defined]
# Load the exposed API of the options
__all__ += options.__all__  # type: ignore[attr-defined]
# Load the exposed API of the registry
__all__ += registry.__all__  # type: ignore[attr-defined]
# Load the exposed API of the text layout
__all__ += text.__all__  # type: ignore[attr-defined]
# Load the exposed API of the value kinds
__all__ += values.__all__  # type: ignore[attr-defined]
