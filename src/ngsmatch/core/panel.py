"""
SNP panel loading.

The panel is a BED-like, tab-delimited file: chrom, start, end, [...].
The third column (region end) is taken as the 1-based SNP position.
"""

from __future__ import annotations
import logging
from pathlib import Path
from typing import List, Union

from ngsmatch.core.errors import ConfigError
from ngsmatch.core.models import Locus, PanelIndex
from ngsmatch.core.result import Result, Ok, Err

logger = logging.getLogger(__name__)


def parse_panel_lines(lines) -> List[Locus]:
    """
    Parse panel lines into loci, in file order (duplicates kept).

    Comment (#), 'track' and blank lines are skipped, as are lines with
    fewer than three columns or a non-integer end column.
    """
    loci = []
    for line_num, line in enumerate(lines, 1):
        line = line.strip()
        if not line or line.startswith('#') or line.startswith('track'):
            continue

        parts = line.split('\t')
        if len(parts) < 3:
            logger.warning(f"Panel line {line_num}: insufficient columns, skipping")
            continue

        try:
            pos = int(parts[2])
        except ValueError:
            logger.warning(f"Panel line {line_num}: invalid end coordinate {parts[2]!r}, skipping")
            continue

        loci.append(Locus.from_record(parts[0], pos))
    return loci


def load_panel(panel_path: Union[str, Path]) -> Result[PanelIndex, ConfigError]:
    """
    Load the SNP panel and build its locus index.

    Args:
        panel_path: Path to the tab-delimited panel (BED) file

    Returns:
        Ok(PanelIndex), or Err(ConfigError) if the file cannot be read or
        contains no loci
    """
    panel_path = Path(panel_path)

    if not panel_path.is_file():
        return Err(ConfigError(f"Panel file not found: {panel_path}", panel_path))

    try:
        with open(panel_path) as f:
            loci = parse_panel_lines(f)
    except (OSError, UnicodeDecodeError) as e:
        return Err(ConfigError(f"Failed to read panel file {panel_path}: {e}", panel_path))

    panel = PanelIndex(loci)
    if len(panel) == 0:
        return Err(ConfigError(f"Panel file contains no loci: {panel_path}", panel_path))

    duplicates = len(loci) - len(panel)
    logger.info(f"✓ Loaded {len(panel)} panel loci from {panel_path}")
    if duplicates:
        logger.info(f"  └─ {duplicates} duplicate entries collapsed")

    return Ok(panel)
