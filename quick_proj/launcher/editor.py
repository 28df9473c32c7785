"""Editor launcher — open a project directory in an external editor.

An editor is either a known alias (``vscode``, ``neovim``...) or a raw
command line such as ``code -n``. The launcher only reports whether the
process could be started; what the editor does afterwards is its own
business.
"""

from __future__ import annotations

import logging
import shlex
import shutil
import subprocess
from pathlib import Path

from quick_proj.domain.errors import LaunchError

logger = logging.getLogger(__name__)

EDITOR_ALIASES: dict[str, str] = {
    "code": "code",
    "vscode": "code",
    "cursor": "cursor",
    "vim": "vim",
    "nvim": "nvim",
    "neovim": "nvim",
    "emacs": "emacs",
    "sublime": "subl",
    "subl": "subl",
    "atom": "atom",
    "idea": "idea",
    "intellij": "idea",
    "webstorm": "webstorm",
    "pycharm": "pycharm",
    "goland": "goland",
    "rustrover": "rustrover",
    "zed": "zed",
}


def resolve_editor_command(editor: str) -> list[str]:
    """Expand an alias, or split a raw command line, into argv."""
    alias = EDITOR_ALIASES.get(editor.strip().lower())
    if alias is not None:
        return [alias]
    try:
        argv = shlex.split(editor)
    except ValueError as err:
        raise LaunchError([editor], f"cannot parse editor command ({err})") from err
    if not argv:
        raise LaunchError([editor], "empty editor command")
    return argv


def is_editor_available(editor: str) -> bool:
    """Return True if the editor's executable is on PATH."""
    try:
        argv = resolve_editor_command(editor)
    except LaunchError:
        return False
    return shutil.which(argv[0]) is not None


class SubprocessLauncher:
    """Launcher that runs the editor as a child process.

    Standard streams are inherited so terminal editors take over the
    terminal; the call returns once the editor process exits.
    """

    def launch(self, editor: str, path: Path) -> int:
        command = [*resolve_editor_command(editor), str(path)]
        logger.debug("Launching %s", command)
        try:
            process = subprocess.Popen(command)
        except OSError as err:
            reason = "command not found" if isinstance(err, FileNotFoundError) else str(err)
            raise LaunchError(command, reason) from err

        returncode = process.wait()
        if returncode != 0:
            logger.warning("Editor exited with status %d: %s", returncode, shlex.join(command))
        return returncode
