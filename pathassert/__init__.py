"""
pathassert - fluent assertions on filesystem paths.

Module layout:
- assertions  PathAssert and assert_that
- paths       path-structure helpers (normalize, parent, prefix/suffix)
- integrity   file digests
- matchers    glob / regex / predicate directory-entry matchers
- diff        byte and text comparison
- config      YAML configuration and the global settings
- log         rich logging handler
- types       result data classes and exceptions

Example:
    from pathassert import assert_that

    assert_that("somefile.txt").exists().is_regular_file().has_file_name("somefile.txt")
"""

__version__ = "0.1.0"

from pathassert.assertions import PathAssert, assert_that
from pathassert.config import AssertConfig, get_config, load_config, reset_config, set_config
from pathassert.types import (
    ConfigError,
    EvaluationError,
    InvalidArgumentError,
    PathAssertError,
    PathAssertionError,
    UnsupportedAlgorithmError,
)

__all__ = [
    "__version__",
    # assertions
    "PathAssert",
    "assert_that",
    # configuration
    "AssertConfig",
    "get_config",
    "set_config",
    "reset_config",
    "load_config",
    # errors
    "PathAssertionError",
    "PathAssertError",
    "EvaluationError",
    "UnsupportedAlgorithmError",
    "InvalidArgumentError",
    "ConfigError",
]
