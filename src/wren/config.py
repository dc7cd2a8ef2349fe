"""Page creator configuration.

PageCreatorConfig is a frozen dataclass — immutable after creation,
IDE-autocompletable, no string-key dict lookups.
"""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class PageCreatorConfig:
    """Page creator configuration. Immutable after creation.

    Only ``path`` is required. Override what you need::

        config = PageCreatorConfig(path="src/pages", ignore=("drafts/*",))
    """

    # Root directory holding page source files
    path: str | Path = ""
    # Fail at startup when the root directory does not exist
    path_check: bool = True

    # fnmatch patterns (relative to path) that never become pages
    ignore: tuple[str, ...] = ()

    # Extensions treated as page components
    extensions: tuple[str, ...] = (".py", ".js", ".jsx", ".ts", ".tsx")

    @property
    def root(self) -> Path:
        """Absolute root directory."""
        return Path(self.path).resolve()
