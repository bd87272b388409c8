"""
Custom view settings
"""

from pathlib import Path
from typing import Any, Dict, List, Union
from dataclasses import dataclass, field

import yaml

from .errors import ConfigNotFound, ConfigParseError


@dataclass
class ViewSetting:
    """Column layout for one resource view"""
    columns: List[str] = field(default_factory=list)
    sort_column: str = ''

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ViewSetting':
        columns = data.get('columns') or []
        if not isinstance(columns, list):
            raise ValueError('columns must be a list')
        sort_column = data.get('sortColumn') or ''
        return cls(columns=[str(c) for c in columns], sort_column=str(sort_column))


class ViewConfig:
    """User customizations of resource views, keyed by resource name"""

    ROOT_KEY = 'skinwatch'

    def __init__(self):
        self.views: Dict[str, ViewSetting] = {}

    def reset(self):
        """Drop every loaded view setting"""
        self.views = {}

    def __len__(self) -> int:
        return len(self.views)

    def load(self, path: Union[str, Path]):
        """Load view settings, replacing the current ones.

        Raises:
            ConfigNotFound: if ``path`` does not exist
            ConfigParseError: if the file is not a valid views file
        """
        path = Path(path)
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except FileNotFoundError as e:
            raise ConfigNotFound(path, 'no such file') from e
        except yaml.YAMLError as e:
            raise ConfigParseError(path, f"YAML parse error: {e}") from e
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigParseError(path, str(e)) from e

        if data is None:
            self.views = {}
            return
        if not isinstance(data, dict):
            raise ConfigParseError(path, 'views file must be a mapping')
        if self.ROOT_KEY in data:
            data = data[self.ROOT_KEY] or {}
            if not isinstance(data, dict):
                raise ConfigParseError(path, f"{self.ROOT_KEY} section must be a mapping")

        raw_views = data.get('views') or {}
        if not isinstance(raw_views, dict):
            raise ConfigParseError(path, 'views must be a mapping')

        views = {}
        for resource, setting in raw_views.items():
            if not isinstance(setting, dict):
                raise ConfigParseError(path, f"view {resource!r} must be a mapping")
            try:
                views[str(resource)] = ViewSetting.from_dict(setting)
            except ValueError as e:
                raise ConfigParseError(path, f"view {resource!r}: {e}") from e
        self.views = views


def new_custom_view() -> ViewConfig:
    """Create an empty view configuration"""
    return ViewConfig()
