"""
config.py - Game options for dropfour

GameOptions collects the settings a game session needs. Defaults can be
overridden from the environment (DROPFOUR_RULES, DROPFOUR_LOG_LEVEL,
DROPFOUR_SAVE_DIR) and then from command-line flags.
"""

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional, Tuple

from dropfour.debug import debug
from dropfour.utils import RulesVariation

DEFAULT_SAVE_DIR = os.path.join(os.path.expanduser("~"), ".dropfour")
DEFAULT_PLAYER_NAMES = ("Red", "Yellow")


@dataclass
class GameOptions:
    rules: RulesVariation = RulesVariation.CLASSIC
    player_names: Tuple[str, str] = DEFAULT_PLAYER_NAMES
    log_level: str = "warning"
    save_dir: str = field(default=DEFAULT_SAVE_DIR)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'GameOptions':
        """
        Build options from environment variables.

        Raises:
            ValueError: DROPFOUR_RULES names an unknown variation
        """
        environ = os.environ if environ is None else environ
        options = cls()

        if environ.get("DROPFOUR_RULES"):
            options.rules = RulesVariation.from_name(environ["DROPFOUR_RULES"])
        if environ.get("DROPFOUR_LOG_LEVEL"):
            options.log_level = environ["DROPFOUR_LOG_LEVEL"]
        if environ.get("DROPFOUR_SAVE_DIR"):
            options.save_dir = environ["DROPFOUR_SAVE_DIR"]

        return options

    def apply_logging(self):
        """Push log_level into the shared debug manager."""
        debug.set_from_string(self.log_level)
