"""fallible: explicit two-slot results for code that raises.

Public API:
    - ok(), failure(): build Data / Failure results
    - is_ok(), is_failure(): discriminate a result
    - from_try_catch(), from_async_try_catch(): run a thunk into a result
    - from_throwable(), from_async_throwable(): wrap a function to return results
    - Config, use_config(): control capture logging
"""

from __future__ import annotations

import logging

from fallible.adapters import (
    ErrorTransformer,
    from_async_throwable,
    from_async_try_catch,
    from_throwable,
    from_try_catch,
)
from fallible.config import Config, get_config, refresh_env_config, use_config
from fallible.errors import ConfigurationError, FallibleError
from fallible.result import Data, Failure, Result, failure, is_failure, is_ok, ok

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("fallible")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"

# Library-level NullHandler: stay silent unless the consumer configures logging.
logging.getLogger("fallible").addHandler(logging.NullHandler())

__all__ = [
    "Config",
    "ConfigurationError",
    "Data",
    "ErrorTransformer",
    "FallibleError",
    "Failure",
    "Result",
    "failure",
    "from_async_throwable",
    "from_async_try_catch",
    "from_throwable",
    "from_try_catch",
    "get_config",
    "is_failure",
    "is_ok",
    "ok",
    "refresh_env_config",
    "use_config",
]
