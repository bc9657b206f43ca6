"""Run the full conversion: scan every identity, then pack each target."""
import logging
import shutil
from dataclasses import dataclass, field
from typing import List

from painicons.iconset import pack_icns
from painicons.ico import write_ico
from painicons.scanner import scan_sources
from painicons.targets import ConversionTarget, Platform, TargetResult, TargetState

logger = logging.getLogger(__name__)


@dataclass
class ConversionReport:
    results: List[TargetResult] = field(default_factory=list)

    @property
    def incomplete(self) -> List[TargetResult]:
        return [r for r in self.results if not r.complete]

    @property
    def complete(self) -> bool:
        return not self.incomplete

    def for_identity(self, name: str) -> List[TargetResult]:
        return [r for r in self.results if r.identity == name]


def targets_for(config, identity_name, tool_lookup=shutil.which):
    """The ICO and ICNS targets for one identity under *config*'s layout."""
    return [
        ConversionTarget(Platform.ICO, config.get_windows_dir() / f"{identity_name}.ico"),
        ConversionTarget(Platform.ICNS, config.get_macos_dir() / f"{identity_name}.icns", tool_lookup),
    ]


def run_conversion(config, tool_lookup=shutil.which) -> ConversionReport:
    """Convert every configured identity.

    All sources are scanned before anything is written, so a missing identity
    aborts with MissingSourceError and leaves the output directories untouched.
    """
    icon_sets = scan_sources(config.get_source_dir(), config.get_identities(),
                             config.get_resolutions())

    report = ConversionReport()
    for icon_set in icon_sets:
        name = icon_set.identity.name
        logger.debug("%s: %s", name, TargetState.SCANNED.value)
        for target in targets_for(config, name, tool_lookup):
            if target.platform is Platform.ICO:
                write_ico(icon_set, target.output_path)
                result = TargetResult(name, Platform.ICO, TargetState.PACKED, target.output_path)
            else:
                staging_dir = config.get_macos_dir() / f"{name}.iconset"
                result = pack_icns(icon_set, staging_dir, target)
            report.results.append(result)
            logger.info("%s", result.describe())
    return report
