"""Configuration for the bookmark launcher service."""
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple


# Naming schemes for generated desktop files
POSITIONAL_NAMING = "positional"
TITLE_NAMING = "title"

DESKTOP_SUFFIX = ".desktop"


def _browser_profile(home: Path, *parts: str) -> Path:
    return home.joinpath(".config", *parts, "Default", "Bookmarks")


@dataclass
class VariantConfig:
    """What to read, how to name the output and how to launch it."""
    name: str
    sources: List[Tuple[str, Path]]  # (label, bookmarks path), highest priority first
    roots: Tuple[str, ...]
    naming: str
    file_prefix: str
    launch_command: str
    target_dir_name: str
    icon: str = "web-browser"
    categories: str = "Network;WebBrowser;"
    show_indicator: bool = False


def simple_variant(home: Optional[Path] = None) -> VariantConfig:
    """Vivaldi only, bookmark bar only, files numbered by position."""
    home = home or Path.home()
    return VariantConfig(
        name="simple",
        sources=[("Vivaldi", _browser_profile(home, "vivaldi"))],
        roots=("bookmark_bar",),
        naming=POSITIONAL_NAMING,
        file_prefix="vivaldi-bookmark",
        launch_command="vivaldi",
        target_dir_name="vivaldi-bookmarks",
    )


def multi_browser_variant(home: Optional[Path] = None) -> VariantConfig:
    """First installed Chromium-family browser, all roots, files named by title."""
    home = home or Path.home()
    return VariantConfig(
        name="multi",
        sources=[
            ("Vivaldi", _browser_profile(home, "vivaldi")),
            ("Google Chrome", _browser_profile(home, "google-chrome")),
            ("Chromium", _browser_profile(home, "chromium")),
            ("Brave", _browser_profile(home, "BraveSoftware", "Brave-Browser")),
            ("Microsoft Edge", _browser_profile(home, "microsoft-edge")),
        ],
        roots=("bookmark_bar", "other", "synced"),
        naming=TITLE_NAMING,
        file_prefix="browser-bookmark",
        launch_command="xdg-open",
        target_dir_name="browser-bookmarks",
        show_indicator=True,
    )


VARIANTS = {
    "simple": simple_variant,
    "multi": multi_browser_variant,
}


def get_variant(name: str, home: Optional[Path] = None) -> VariantConfig:
    """Build a variant preset by name.

    Raises:
        ValueError: If the name is not a known variant
    """
    try:
        factory = VARIANTS[name]
    except KeyError:
        raise ValueError(f"Unknown variant: {name!r} (expected one of {sorted(VARIANTS)})")
    return factory(home)


def default_applications_dir() -> Path:
    """The user's application descriptor directory (XDG data home aware)."""
    data_home = os.environ.get("XDG_DATA_HOME")
    base = Path(data_home) if data_home else Path.home() / ".local" / "share"
    return base / "applications"


@dataclass
class Config:
    """Main configuration for the bookmark launcher service."""
    variant: VariantConfig = field(default_factory=simple_variant)
    applications_dir: Path = field(default_factory=default_applications_dir)
    debounce_delay: float = 0.5  # Seconds of quiet before regenerating
    refresh_delay: float = 0.5  # Seconds before the refresh placeholder is removed
    log_level: str = "INFO"

    @property
    def target_dir(self) -> Path:
        """Directory that holds the generated desktop files."""
        return self.applications_dir / self.variant.target_dir_name

    @classmethod
    def from_env(cls) -> "Config":
        """Create config from environment variables."""
        variant = get_variant(os.environ.get("BOOKMARKS_LAUNCHER_VARIANT", "simple"))

        source = os.environ.get("BOOKMARKS_LAUNCHER_SOURCE")
        if source:
            variant.sources = [("Custom", Path(source).expanduser())]

        apps_dir = os.environ.get("BOOKMARKS_LAUNCHER_APPLICATIONS_DIR")

        return cls(
            variant=variant,
            applications_dir=Path(apps_dir).expanduser() if apps_dir else default_applications_dir(),
            debounce_delay=int(os.environ.get("BOOKMARKS_LAUNCHER_DEBOUNCE_MS", "500")) / 1000,
            refresh_delay=int(os.environ.get("BOOKMARKS_LAUNCHER_REFRESH_MS", "500")) / 1000,
            log_level=os.environ.get("BOOKMARKS_LAUNCHER_LOG_LEVEL", "INFO").upper(),
        )


# Global config instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get the global config instance.

    Returns:
        Config loaded from environment
    """
    global _config

    if _config is None:
        _config = Config.from_env()

    return _config
