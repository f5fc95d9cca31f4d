from typing import TypeAlias

from ._core import (
    counting_mapping as _counting_mapping,
    default_mapping as _default_mapping,
    layered_mapping as _layered_mapping,
)

__version__ = '0.1.0'

CountingMapping: TypeAlias = _counting_mapping.CountingMapping
DefaultMapping: TypeAlias = _default_mapping.DefaultMapping
LayeredMapping: TypeAlias = _layered_mapping.LayeredMapping
