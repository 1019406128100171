"""Launch-at-login registration through a per-user LaunchAgent."""

import logging
import plistlib
import subprocess
import sys
from pathlib import Path
from typing import List, Optional

logger = logging.getLogger(__name__)

DEFAULT_BUNDLE_ID = "com.clipjoint.app"


class LoginItemError(Exception):
    """Raised when launch-at-login cannot be changed; ``str()`` is user facing."""


class RequiresApprovalError(LoginItemError):
    def __init__(self):
        super().__init__(
            "Open System Settings > General > Login Items and allow ClipJoint "
            "to finish enabling launch at login.")


class NotFoundError(LoginItemError):
    def __init__(self):
        super().__init__(
            "Launch at login is only available after ClipJoint is installed.")


class RegistrationFailedError(LoginItemError):
    def __init__(self):
        super().__init__(
            "ClipJoint could not enable launch at login. Please try again.")


class LoginItemManager:

    def __init__(
        self,
        bundle_id: str = DEFAULT_BUNDLE_ID,
        program_arguments: Optional[List[str]] = None,
        launch_agents_dir: Optional[Path] = None,
        runner=subprocess.run,
    ):
        self.bundle_id = bundle_id
        self.program_arguments = program_arguments or [sys.executable, "-m", "clipjoint.main", "run"]
        self.launch_agents_dir = launch_agents_dir or Path.home() / "Library" / "LaunchAgents"
        self._run = runner

    @property
    def plist_path(self) -> Path:
        return self.launch_agents_dir / f"{self.bundle_id}.plist"

    @property
    def is_enabled(self) -> bool:
        if not self.plist_path.exists():
            return False
        try:
            result = self._run(
                ["launchctl", "list", self.bundle_id],
                capture_output=True, text=True,
            )
        except OSError:
            return False
        return result.returncode == 0

    def set_enabled(self, enabled: bool) -> None:
        if enabled:
            if self.is_enabled:
                return
            self._register()
            if not self.is_enabled:
                raise RegistrationFailedError()
        else:
            if not self.plist_path.exists():
                return
            self._unregister()

    def _register(self) -> None:
        executable = Path(self.program_arguments[0])
        if not executable.exists():
            raise NotFoundError()

        self.launch_agents_dir.mkdir(parents=True, exist_ok=True)
        with self.plist_path.open("wb") as fh:
            plistlib.dump({
                "Label": self.bundle_id,
                "ProgramArguments": self.program_arguments,
                "RunAtLoad": True,
                "ProcessType": "Interactive",
            }, fh)

        result = self._run(
            ["launchctl", "load", "-w", str(self.plist_path)],
            capture_output=True, text=True,
        )
        if result.returncode != 0:
            logger.warning("launchctl load failed: %s", (result.stderr or "").strip())
            if "Operation not permitted" in (result.stderr or ""):
                raise RequiresApprovalError()
            raise RegistrationFailedError()

    def _unregister(self) -> None:
        self._run(
            ["launchctl", "unload", "-w", str(self.plist_path)],
            capture_output=True, text=True,
        )
        self.plist_path.unlink()


class AppSettings:
    """App-level preference state, currently launch-at-login only."""

    def __init__(self, login_item_manager: LoginItemManager):
        self.login_item_manager = login_item_manager
        self.launch_at_login_enabled = login_item_manager.is_enabled
        self.launch_at_login_error: Optional[str] = None

    def set_launch_at_login(self, enabled: bool) -> None:
        try:
            self.login_item_manager.set_enabled(enabled)
            self.launch_at_login_error = None
        except (LoginItemError, OSError) as e:
            logger.warning(f"Launch at login change failed: {e}")
            self.launch_at_login_error = str(e)
        finally:
            self.launch_at_login_enabled = self.login_item_manager.is_enabled
