"""Format detection for image filenames.

The accepted formats come from ``config.FORMAT_EXTENSIONS`` and are checked
once against the running Pillow build: a format is accepted only when Pillow
can both open and save it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Tuple, Union

from PIL import Image

from config import CONFIG

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FormatCapability:
    """Decode/encode support for one Pillow format."""

    name: str
    extensions: Tuple[str, ...]
    can_decode: bool
    can_encode: bool

    @property
    def supported(self) -> bool:
        return self.can_decode and self.can_encode


def probe_capabilities(
    table: Optional[Mapping[str, Tuple[str, ...]]] = None,
) -> Dict[str, FormatCapability]:
    """Check each configured format against the installed Pillow plugins.

    Parameters
    ----------
    table
        Mapping of Pillow format identifier to extensions. Defaults to
        ``CONFIG.formats``.

    Returns
    -------
    dict
        Format identifier -> :class:`FormatCapability`, including formats the
        build cannot handle.
    """

    Image.init()
    table = CONFIG.formats if table is None else table
    capabilities: Dict[str, FormatCapability] = {}
    for name, extensions in table.items():
        key = name.upper()
        capability = FormatCapability(
            name=key,
            extensions=tuple(ext.lower().lstrip(".") for ext in extensions),
            can_decode=key in Image.OPEN,
            can_encode=key in Image.SAVE,
        )
        if not capability.supported:
            logger.warning(
                "Pillow build cannot %s %s images; format disabled.",
                "decode" if not capability.can_decode else "encode",
                key,
            )
        capabilities[key] = capability
    return capabilities


class FormatGate:
    """Accepts filenames whose extension maps to a supported format."""

    def __init__(
        self, capabilities: Optional[Mapping[str, FormatCapability]] = None
    ) -> None:
        if capabilities is None:
            capabilities = probe_capabilities()
        self._by_extension: Dict[str, str] = {}
        for capability in capabilities.values():
            if not capability.supported:
                continue
            for ext in capability.extensions:
                self._by_extension[ext.lower()] = capability.name

    @property
    def extensions(self) -> List[str]:
        return sorted(self._by_extension)

    @property
    def formats(self) -> List[str]:
        return sorted(set(self._by_extension.values()))

    def extensions_for(self, fmt: str) -> List[str]:
        return sorted(ext for ext, name in self._by_extension.items() if name == fmt)

    def format_for(self, filename: Union[str, Path]) -> Optional[str]:
        """Return the format for ``filename`` without logging."""

        name = Path(filename).name
        if "." not in name:
            return None
        token = name.rsplit(".", 1)[1]
        if not token:
            return None
        return self._by_extension.get(token.lower())

    def validate(self, filename: Union[str, Path]) -> Optional[str]:
        """Return the Pillow format for ``filename`` or None if it is rejected.

        A rejection is logged as an error; nothing is raised.
        """

        fmt = self.format_for(filename)
        if fmt is None:
            logger.error(
                "Unsupported image suffix for '%s'. Supported suffixes: %s.",
                Path(filename).name,
                ", ".join(self.extensions),
            )
        return fmt


@lru_cache(maxsize=1)
def default_gate() -> FormatGate:
    """Process-wide gate built from ``CONFIG.formats`` on first use."""

    return FormatGate()


def validate_format(
    filename: Union[str, Path], gate: Optional[FormatGate] = None
) -> Optional[str]:
    """Validate ``filename`` against ``gate`` (the default gate if omitted)."""

    return (gate or default_gate()).validate(filename)
