"""Import classes and definitions used for input/output or user interfaces."""

from .logging import configure_logging as configure_logging
from .logging import console as console
from .logging import log_info as log_info
from .logging import log_warning as log_warning
