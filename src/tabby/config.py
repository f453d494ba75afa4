"""Tabby configuration.

TabbyConfig is the central configuration object, frozen after creation.
"""

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True, slots=True)
class TabbyConfig:
    """Configuration for a Tabby application.

    Attributes:
        root: Path to the project root directory. Always resolved to an
              absolute path on construction.
        out_dir: Build output root (contains the asset directory).
        assets_dir: Asset directory name inside ``out_dir``.  Its contents
            are embedded into the bundle and mirrored by export.
        dist: Destination directory for static export.
        routes_dir: Directory containing page route modules.
        bundle: Path of the generated bundle module.
        debug: Development mode.  The bundle wraps the live asset directory
            instead of embedding its bytes.
        host: Bind address for serve mode.
        port: Bind port for serve mode.

    """

    root: Path = field(default_factory=Path.cwd)
    out_dir: Path = field(default_factory=lambda: Path("build"))
    assets_dir: str = "output"
    dist: Path = field(default_factory=lambda: Path("dist"))
    routes_dir: str = "routes"
    bundle: Path = field(default_factory=lambda: Path("build/_tabby_bundle.py"))
    debug: bool = False
    host: str = "127.0.0.1"
    port: int = 8000

    def __post_init__(self) -> None:
        if not self.root.is_absolute():
            object.__setattr__(self, "root", self.root.resolve())

    def _resolve(self, path: Path) -> Path:
        if path.is_absolute():
            return path
        return self.root / path

    @property
    def out_path(self) -> Path:
        """Absolute path to the build output root."""
        return self._resolve(self.out_dir)

    @property
    def assets_path(self) -> Path:
        """Absolute path to the asset directory."""
        return self.out_path / self.assets_dir

    @property
    def dist_path(self) -> Path:
        """Absolute path to the export destination."""
        return self._resolve(self.dist)

    @property
    def routes_path(self) -> Path:
        """Absolute path to the page routes directory."""
        return self.root / self.routes_dir

    @property
    def bundle_path(self) -> Path:
        """Absolute path to the generated bundle module."""
        return self._resolve(self.bundle)
