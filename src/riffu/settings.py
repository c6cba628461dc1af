import logging
from dataclasses import dataclass, field, replace
from typing import Any, Optional, TypeVar

_SettingT = TypeVar('_SettingT', bound='_DefaultOverride')

LOGGER = logging.getLogger('riffu')


@dataclass(frozen=True)
class _DefaultOverride(object):
    def __call__(self: _SettingT, **kwargs: Any) -> _SettingT:
        return replace(self, **kwargs)


@dataclass(frozen=True)
class ReadSetting(_DefaultOverride):
    """Setting for reading RIFF chunks

    strict: if set to True, raise on non-zero padding between chunks,
        otherwise log warning

    max_depth: limit levels of container chunks to materialize
        with read_tree, None for unlimited

    logger: where diagnostics are reported
    """

    strict: bool = False
    max_depth: Optional[int] = None
    logger: logging.Logger = field(default=LOGGER, compare=False)


settings = ReadSetting()
