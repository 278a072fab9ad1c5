"""
CLI context for Package Comparer.

This module provides the context object that is passed to all CLI commands,
holding configuration and the snapshot provider registry.
"""

from dataclasses import dataclass, field
from pathlib import Path

from package_comparer.config import ComparerConfig, load_config_from_yaml
from package_comparer.snapshot.providers import FileSnapshotProvider, SnapshotProviderRegistry
from package_comparer.utils.logging import configure_logging, get_logger

logger = get_logger(__name__)


@dataclass
class ComparerContext:
    """
    Context object for CLI commands.

    Attributes:
        config_path: Path to configuration file
        log_level: Console logging level given on the command line
        log_file: Optional log file path given on the command line
        config: Loaded comparer configuration
    """

    config_path: Path | None = None
    log_level: str | None = None
    log_file: Path | None = None

    # Lazy-loaded attributes
    _config: ComparerConfig | None = field(default=None, init=False, repr=False)

    @property
    def config(self) -> ComparerConfig:
        """Get or load comparer configuration.

        Without a config file the settings come from ``PACKAGE_COMPARER_*``
        environment variables and defaults.
        """
        if self._config is None:
            if self.config_path is None:
                self._config = ComparerConfig()
            else:
                logger.debug("loading_configuration", config_path=str(self.config_path))
                self._config = load_config_from_yaml(self.config_path)
            self._apply_logging_config(self._config)

        return self._config

    def _apply_logging_config(self, config: ComparerConfig) -> None:
        """Reconfigure logging; command line options take precedence over config."""
        log_file = str(self.log_file) if self.log_file else config.logging.file
        configure_logging(
            level=self.log_level or config.logging.level,
            log_format=config.logging.format,
            log_file=log_file,
            file_level=config.logging.file_level,
        )

    def registry(self, snapshot_dir: Path | str | None = None) -> SnapshotProviderRegistry:
        """Build a provider registry that reads snapshot files for any package id.

        Args:
            snapshot_dir: Snapshot root (defaults to ``paths.snapshot_dir``)
        """
        root = Path(snapshot_dir or self.config.paths.snapshot_dir)
        return SnapshotProviderRegistry(default_factory=lambda: FileSnapshotProvider(root))
