"""Local audio playback through an OS-level player command."""

import logging
import shlex
import subprocess
from pathlib import Path

logger = logging.getLogger(__name__)


def _build_player_cmd(player: str, path: Path) -> list[str]:
    """Build the player command array; ``player`` may carry its own flags."""
    return [*shlex.split(player), str(path)]


def play_audio(path: Path, player: str = "afplay") -> None:
    """Play an audio file and block until the player exits.

    Raises:
        OSError: If the player command cannot be started
        subprocess.CalledProcessError: If the player exits with an error
    """
    cmd = _build_player_cmd(player, path)
    logger.debug("Running player: %s", " ".join(cmd))
    subprocess.run(cmd, check=True, capture_output=True)
