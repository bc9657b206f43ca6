"""Conversion targets and the outcome of running each one."""
import enum
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional

ICONUTIL = "iconutil"


class Platform(enum.Enum):
    ICO = "ico"
    ICNS = "icns"


class TargetState(enum.Enum):
    SCANNED = "scanned"
    STAGED = "staged"
    PACKED = "packed"
    AWAITING_EXTERNAL_TOOL = "awaiting-external-tool"
    # none of the source sizes has an iconset slot
    NOTHING_TO_STAGE = "nothing-to-stage"

    @property
    def terminal(self) -> bool:
        return self in (TargetState.PACKED, TargetState.AWAITING_EXTERNAL_TOOL,
                        TargetState.NOTHING_TO_STAGE)


@dataclass
class ConversionTarget:
    platform: Platform
    output_path: Path
    tool_lookup: Callable[[str], Optional[str]] = field(default=shutil.which, repr=False)

    def tool_path(self) -> Optional[str]:
        """Location of the packing tool, or None when it is not on this host."""
        if self.platform is Platform.ICO:
            return None
        return self.tool_lookup(ICONUTIL)

    def is_available(self) -> bool:
        if self.platform is Platform.ICO:
            return True
        return self.tool_path() is not None


@dataclass
class TargetResult:
    identity: str
    platform: Platform
    state: TargetState
    output_path: Path
    staging_dir: Optional[Path] = None

    @property
    def complete(self) -> bool:
        return self.state is TargetState.PACKED

    def describe(self) -> str:
        return f"{self.identity} [{self.platform.value}]: {self.state.value} -> {self.output_path}"


@dataclass
class SkippedPlatformStep(TargetResult):
    """Staging finished but the packing tool is missing on this host.

    Not an error: run the recorded ``command`` on a host that has the tool.
    """

    tool: str = ICONUTIL
    command: tuple = ()

    def describe(self) -> str:
        return (f"{self.identity} [{self.platform.value}]: {self.tool} not available, "
                f"staged at {self.staging_dir}; finish with: {' '.join(self.command)}")
